"""
Connectivity Graph Builder
==========================

How c†_n and c_n map blocks onto blocks.

For every mode n, both directions, and every Fock state |r>:

    |r'> = op |r>
    if <r'|r'> > norm_threshold:
        origin = block of |r>
        target = block of the quantum numbers of |r'>
        record origin → target

A second, different target for the same (mode, direction, origin)
means the blocks are not invariant: InconsistentBlockStructure.

Outputs:
  - connection tables: per mode, an int array over blocks (-1 = none)
  - BlockOperator: c†_n / c_n restricted to block pairs (sparse)

Author: Masamichi Iizumi, Tamaki Iizumi
"""

import numpy as np
import scipy.sparse as sp
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from .config import DecompositionConfig
from .exceptions import FockSectorsError, InconsistentBlockStructure, IndexOutOfRange
from .fundamental_operators import FundamentalOperatorSet
from .hilbert_space import BlockState, SubHilbertSpace
from .operators import ManyBodyOperator, OperatorMatrix
from .partition import Partition
from .quantum_numbers import QuantumNumberEvaluator, QuantumNumbers


CREATION = "creation"
DESTRUCTION = "destruction"


# =============================================================================
# Block-restricted operator
# =============================================================================

class BlockOperator:
    """
    c†_n or c_n stored block by block.

    For every origin block b with target t = connection[b], holds the
    sparse (dim_t × dim_b) matrix in the local bases.

    Example:
        >>> op = sorted_spaces.creation_operator(0)
        >>> out = op.apply(BlockState.basis(sorted_spaces.subspace(0), 0))
        >>> out.block
        1
    """

    def __init__(self, mode: int, direction: str, connection: np.ndarray,
                 blocks: Dict[int, sp.csr_matrix]):
        self.mode = mode
        self.direction = direction
        self.table = connection
        self._blocks = blocks

    @classmethod
    def from_operator(cls, mode: int, direction: str, op: OperatorMatrix,
                      connection: np.ndarray,
                      subspaces: List[SubHilbertSpace]) -> "BlockOperator":
        blocks = {}
        full = op.matrix.tocsr()
        for origin, target in enumerate(connection):
            if target < 0:
                continue
            rows = subspaces[target].embedding()
            cols = subspaces[origin].embedding()
            blocks[origin] = full[rows][:, cols].tocsr()
        return cls(mode, direction, connection, blocks)

    def connection(self, block: int) -> int:
        """Target block of origin block, -1 if none."""
        self._check_block(block)
        return int(self.table[block])

    def _check_block(self, block: int):
        if not 0 <= block < len(self.table):
            raise IndexOutOfRange(block, len(self.table), "block")

    def matrix(self, block: int) -> Optional[sp.csr_matrix]:
        return self._blocks.get(block)

    def apply(self, state: BlockState) -> Optional[BlockState]:
        """Return op|state>, or None if op annihilates the whole block."""
        self._check_block(state.block)
        mat = self._blocks.get(state.block)
        if mat is None:
            return None
        return BlockState(int(self.table[state.block]), mat @ state.amplitudes)

    __call__ = apply

    def __repr__(self) -> str:
        return (f"BlockOperator(mode={self.mode}, {self.direction}, "
                f"{len(self._blocks)} connected blocks)")


# =============================================================================
# Graph builder
# =============================================================================

@dataclass
class Connectivity:
    """Per-mode connection tables and block operators."""
    creation_connection: List[np.ndarray] = field(default_factory=list)
    destruction_connection: List[np.ndarray] = field(default_factory=list)
    creation_operators: List[BlockOperator] = field(default_factory=list)
    destruction_operators: List[BlockOperator] = field(default_factory=list)


class ConnectivityGraphBuilder:
    """
    Derive the block-to-block connectivity of c†_n and c_n.

    Args:
        fops: Fundamental operator set
        partition: Block registry from SubspacePartitioner
        evaluator: Quantum-number evaluator used for the partition
        resolve: Maps a quantum-number vector to its block index (None if unknown)
        config: Decomposition configuration
    """

    def __init__(self, fops: FundamentalOperatorSet, partition: Partition,
                 evaluator: QuantumNumberEvaluator,
                 resolve: Callable[[QuantumNumbers], Optional[int]],
                 config: Optional[DecompositionConfig] = None):
        self.fops = fops
        self.partition = partition
        self.evaluator = evaluator
        self.resolve = resolve
        self.config = config or DecompositionConfig()

    def _connect(self, mode: int, direction: str, op: OperatorMatrix) -> np.ndarray:
        full_hs = self.partition.full_space
        connection = np.full(self.partition.n_subspaces(), -1, dtype=np.int64)

        for r in range(full_hs.dimension()):
            s = full_hs.basis_vector(r)
            out = op(s)
            if np.dot(out, out) <= self.config.norm_threshold:
                continue

            origin = self.partition.find_subspace(r)
            target = self.resolve(self.evaluator.evaluate(out))
            if target is None:
                raise FockSectorsError(
                    f"{direction} operator on mode {mode} maps Fock state {r} "
                    f"outside every known block")

            previous = connection[origin]
            if previous < 0:
                connection[origin] = target
            elif previous != target:
                raise InconsistentBlockStructure(mode, direction, origin,
                                                 (int(previous), target), state=r)
        return connection

    def _build_mode(self, label, mode: int) -> Tuple[np.ndarray, np.ndarray, BlockOperator, BlockOperator]:
        subspaces = self.partition.subspaces
        create = OperatorMatrix(ManyBodyOperator.make_canonical(True, label), self.fops)
        destroy = OperatorMatrix(ManyBodyOperator.make_canonical(False, label), self.fops)

        c_conn = self._connect(mode, CREATION, create)
        d_conn = self._connect(mode, DESTRUCTION, destroy)

        c_op = BlockOperator.from_operator(mode, CREATION, create, c_conn, subspaces)
        d_op = BlockOperator.from_operator(mode, DESTRUCTION, destroy, d_conn, subspaces)

        if self.config.verbose:
            print(f"   mode {mode} {label}: "
                  f"c† {int(np.sum(c_conn >= 0))} links, c {int(np.sum(d_conn >= 0))} links")
        return c_conn, d_conn, c_op, d_op

    def build(self) -> Connectivity:
        if self.config.verbose:
            print(f"🔗 Connectivity: {self.fops.n_operators()} modes, "
                  f"{self.partition.n_subspaces()} blocks")

        modes = list(self.fops)
        if self.config.n_workers > 1 and len(modes) > 1:
            with ThreadPoolExecutor(max_workers=self.config.n_workers) as pool:
                results = list(pool.map(lambda x: self._build_mode(*x), modes))
        else:
            results = [self._build_mode(label, mode) for label, mode in modes]

        conn = Connectivity()
        for c_conn, d_conn, c_op, d_op in results:
            conn.creation_connection.append(c_conn)
            conn.destruction_connection.append(d_conn)
            conn.creation_operators.append(c_op)
            conn.destruction_operators.append(d_op)
        return conn
