"""
Subspace Partitioner
====================

Split the full Fock space into blocks of equal quantum numbers.

Algorithm:
  for r = 0 .. 2^N - 1 (ascending):
      qn = quantum numbers of |r>
      if qn not seen: new block, index = number of blocks so far
      append r to its block

Visiting states in a fixed order makes block indices and local
indices reproducible for a given operator list and mode ordering.

Author: Masamichi Iizumi, Tamaki Iizumi
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .config import DecompositionConfig
from .hilbert_space import HilbertSpace, SubHilbertSpace
from .quantum_numbers import QuantumNumberEvaluator, QuantumNumbers, make_key_map


@dataclass
class Partition:
    """
    Result of the partitioning: the block registry.

    Blocks are referenced everywhere else by their integer index into
    `subspaces`.

    Attributes:
        full_space: The full Hilbert space
        subspaces: Blocks, ordered by block index
        quantum_numbers: Canonical quantum numbers of each block
        block_of_state: Block index of every Fock state
    """
    full_space: HilbertSpace
    subspaces: List[SubHilbertSpace] = field(default_factory=list)
    quantum_numbers: List[QuantumNumbers] = field(default_factory=list)
    block_of_state: List[int] = field(default_factory=list)

    def n_subspaces(self) -> int:
        return len(self.subspaces)

    def find_subspace(self, f: int) -> int:
        """Block index of a Fock state."""
        return self.block_of_state[self.full_space.get_state_index(f)]

    def dimensions(self) -> List[int]:
        return [sp.dimension() for sp in self.subspaces]


class SubspacePartitioner:
    """
    Build the block registry from quantum-number operators.

    Example:
        >>> fops = FundamentalOperatorSet(["a", "b"])
        >>> part = SubspacePartitioner(fops, [n("a") + n("b")]).run()
        >>> part.dimensions()
        [1, 2, 1]
    """

    def __init__(self, fops, qn_operators, config: Optional[DecompositionConfig] = None,
                 evaluator: Optional[QuantumNumberEvaluator] = None):
        self.fops = fops
        self.config = config or DecompositionConfig()
        self.evaluator = evaluator or QuantumNumberEvaluator(qn_operators, fops)
        self.key_map = make_key_map(self.config.key_policy,
                                    self.config.qn_tolerance,
                                    self.config.qn_decimals)

    def run(self) -> Partition:
        full_hs = HilbertSpace(self.fops)
        part = Partition(full_space=full_hs)

        for r in range(full_hs.dimension()):
            fs = full_hs.get_fock_state(r)
            qn = self.evaluator.evaluate_fock_state(fs)

            block = self.key_map.lookup(qn)
            if block is None:
                block = len(part.subspaces)
                part.subspaces.append(SubHilbertSpace(block))
                part.quantum_numbers.append(qn)
                self.key_map.insert(qn, block)

            part.subspaces[block].add_fock_state(fs)
            part.block_of_state.append(block)

        for space in part.subspaces:
            space.freeze()

        if self.config.verbose:
            print(f"🔍 Partition: dim={full_hs.dimension():,} → {part.n_subspaces()} blocks")
            print(f"   Largest block: {max(part.dimensions())}")

        return part

    def resolve(self, qn: QuantumNumbers) -> Optional[int]:
        """Block index of a quantum-number vector, None if unknown."""
        return self.key_map.lookup(qn)
