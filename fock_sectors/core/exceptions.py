"""
Exceptions for fock-sectors
===========================

Every failure of the block decomposition ends up as one of these.
There is no partially built decomposition: any of them aborts
construction of SortedSpaces.

Author: Masamichi Iizumi, Tamaki Iizumi
"""

from typing import Optional, Sequence


class FockSectorsError(Exception):
    """Base class for all decomposition errors."""


class IndexOutOfRange(FockSectorsError, IndexError):
    """A basis index or Fock state lies outside the space."""

    def __init__(self, value: int, dim: int, what: str = "index"):
        self.value = value
        self.dim = dim
        super().__init__(f"{what} {value} out of range for space of dimension {dim}")


class InconsistentBlockStructure(FockSectorsError, RuntimeError):
    """
    A creation/annihilation operator maps two states of the same block
    into two different blocks.

    The quantum numbers do not resolve the block structure of the
    Hamiltonian.

    Attributes:
        mode: Linear index of the offending mode
        direction: 'creation' or 'destruction'
        origin: Origin block index
        targets: The two conflicting target block indices
        state: Fock state that produced the second target
    """

    def __init__(self, mode: int, direction: str, origin: int,
                 targets: Sequence[int], state: Optional[int] = None):
        self.mode = mode
        self.direction = direction
        self.origin = origin
        self.targets = tuple(targets)
        self.state = state
        msg = (f"{direction} operator on mode {mode} maps block {origin} "
               f"to blocks {self.targets[0]} and {self.targets[1]}")
        if state is not None:
            msg += f" (conflict found at Fock state {state})"
        super().__init__(msg + "; the quantum numbers do not block-diagonalize the operator set")


class DiagonalizationFailure(FockSectorsError, RuntimeError):
    """The dense eigensolver failed on a block matrix."""

    def __init__(self, block: int, reason: str = ""):
        self.block = block
        super().__init__(f"Diagonalization of block {block} failed: {reason}")
