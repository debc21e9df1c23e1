"""
Hilbert Spaces for fock-sectors
===============================

Full Fock space and its sub Hilbert spaces (blocks).

Full space:
  - Basis index == Fock state (bitmask), dimension 2^N
Sub Hilbert space:
  - Ordered list of Fock states sharing the same quantum numbers
  - Dense local index 0..dim-1 in insertion order
  - Reverse map Fock state -> local index

Author: Masamichi Iizumi, Tamaki Iizumi
"""

import numbers

import numpy as np
from dataclasses import dataclass
from typing import Dict, List, Tuple

from .exceptions import IndexOutOfRange
from .fundamental_operators import FundamentalOperatorSet


def _check_index(i, dim: int, what: str) -> int:
    if not isinstance(i, numbers.Integral):
        raise TypeError(f"{what} must be an integer, got {i!r}")
    if not 0 <= i < dim:
        raise IndexOutOfRange(i, dim, what)
    return int(i)


# =============================================================================
# Full Hilbert Space
# =============================================================================

class HilbertSpace:
    """
    Full Fock space spanned by all occupation patterns of N modes.

    Example:
        >>> hs = HilbertSpace(FundamentalOperatorSet(["a", "b"]))
        >>> hs.dimension()
        4
        >>> hs.get_fock_state(3)
        3
    """

    def __init__(self, fops: FundamentalOperatorSet):
        self.fops = fops
        self.dim = fops.dimension()

    def dimension(self) -> int:
        return self.dim

    def get_state_index(self, f: int) -> int:
        """Index of a Fock state (identity)."""
        return _check_index(f, self.dim, "Fock state")

    def get_fock_state(self, i: int) -> int:
        """i-th basis element as a Fock state (identity)."""
        return _check_index(i, self.dim, "basis index")

    def basis_vector(self, i: int) -> np.ndarray:
        """Single-amplitude state |i>."""
        vec = np.zeros(self.dim, dtype=np.float64)
        vec[self.get_state_index(i)] = 1.0
        return vec

    def __iter__(self):
        return iter(range(self.dim))

    def __repr__(self) -> str:
        return f"HilbertSpace(N={self.fops.n_operators()}, dim={self.dim})"


# =============================================================================
# Sub Hilbert Space (block)
# =============================================================================

class SubHilbertSpace:
    """
    A block: an ordered set of Fock states.

    Filled by the partitioner with add_fock_state() and frozen
    afterwards; read-only for the rest of its life.

    Attributes:
        index: Block index (assignment order)
    """

    def __init__(self, index: int):
        self.index = index
        self._fock_states: List[int] = []
        self._fock_to_index: Dict[int, int] = {}
        self._frozen = False

    def add_fock_state(self, f: int):
        if self._frozen:
            raise RuntimeError(f"Block {self.index} is frozen")
        f = int(f)
        if f in self._fock_to_index:
            raise ValueError(f"Fock state {f} already in block {self.index}")
        self._fock_to_index[f] = len(self._fock_states)
        self._fock_states.append(f)

    def freeze(self) -> "SubHilbertSpace":
        self._frozen = True
        return self

    def dimension(self) -> int:
        return len(self._fock_states)

    def get_state_index(self, f: int) -> int:
        """Local index of a Fock state of this block."""
        try:
            return self._fock_to_index[int(f)]
        except KeyError:
            raise IndexOutOfRange(f, self.dimension(), f"Fock state (not in block {self.index})") from None

    def get_fock_state(self, i: int) -> int:
        return self._fock_states[_check_index(i, self.dimension(), "local index")]

    def get_index(self) -> int:
        return self.index

    @property
    def fock_states(self) -> Tuple[int, ...]:
        return tuple(self._fock_states)

    def embedding(self) -> np.ndarray:
        """Fock states as an integer array (local index -> full-space index)."""
        return np.asarray(self._fock_states, dtype=np.int64)

    def __contains__(self, f) -> bool:
        return int(f) in self._fock_to_index

    def __len__(self) -> int:
        return len(self._fock_states)

    def __repr__(self) -> str:
        return f"SubHilbertSpace(index={self.index}, dim={self.dimension()})"


# =============================================================================
# States living in a block
# =============================================================================

@dataclass
class BlockState:
    """
    State expressed in the local basis of one block.

    Attributes:
        block: Block index
        amplitudes: Amplitudes in the block's local basis
    """
    block: int
    amplitudes: np.ndarray

    @classmethod
    def basis(cls, space: SubHilbertSpace, i: int) -> "BlockState":
        amps = np.zeros(space.dimension(), dtype=np.float64)
        amps[_check_index(i, space.dimension(), "local index")] = 1.0
        return cls(space.get_index(), amps)

    @property
    def dim(self) -> int:
        return len(self.amplitudes)

    def norm2(self) -> float:
        return float(np.dot(self.amplitudes, self.amplitudes))

    def dot(self, other: "BlockState") -> float:
        if other.block != self.block:
            return 0.0
        return float(np.dot(self.amplitudes, other.amplitudes))

    def to_full(self, space: SubHilbertSpace, full_dim: int) -> np.ndarray:
        """Embed into the full Fock space."""
        vec = np.zeros(full_dim, dtype=self.amplitudes.dtype)
        vec[space.embedding()] = self.amplitudes
        return vec
