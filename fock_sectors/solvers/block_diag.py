"""
Block Diagonalizer
==================

ブロックごとのハミルトニアン対角化 + 基底エネルギーのシフト

Phase 1 (independent per block, parallelizable):
    H_b[:, j] = P_b H |b_j⟩          (dense, local basis)
    H_b = U diag(E) U^T              (scipy.linalg.eigh, ascending E)

Phase 2 (after every block is done):
    E_gs = min_b E_b[0]
    E_b ← E_b - E_gs                 (global minimum becomes exactly 0)

Author: Masamichi Iizumi, Tamaki Iizumi
"""

import numpy as np
import scipy.linalg
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional

from ..core.config import DecompositionConfig
from ..core.exceptions import DiagonalizationFailure
from ..core.hilbert_space import BlockState, SubHilbertSpace
from ..core.operators import OperatorMatrix


@dataclass(frozen=True, eq=False)
class Eigensystem:
    """
    Eigenvalues and eigenvectors of the Hamiltonian in one block.

    Attributes:
        block: Block index
        eigenvalues: Ascending eigenvalues
        eigenvectors: Columns are eigenvectors in the block's local basis
    """
    block: int
    eigenvalues: np.ndarray
    eigenvectors: np.ndarray

    @property
    def dim(self) -> int:
        return len(self.eigenvalues)

    @property
    def unitary_matrix(self) -> np.ndarray:
        """Rows are eigenvectors (local basis → eigenbasis)."""
        return self.eigenvectors.T

    @property
    def eigenstates(self) -> List[BlockState]:
        return [BlockState(self.block, self.eigenvectors[:, e].copy()) for e in range(self.dim)]

    @property
    def ground_energy(self) -> float:
        return float(self.eigenvalues[0])

    def shifted(self, offset: float) -> "Eigensystem":
        """Same eigenvectors, eigenvalues minus offset."""
        return Eigensystem(self.block, self.eigenvalues - offset, self.eigenvectors)


def block_matrix(hamiltonian: OperatorMatrix, space: SubHilbertSpace) -> np.ndarray:
    """Dense matrix of H restricted to a block, column j = H|j⟩ in local basis."""
    dim = space.dimension()
    emb = space.embedding()
    h_matrix = np.zeros((dim, dim), dtype=np.float64)
    full = np.zeros(hamiltonian.dim, dtype=np.float64)
    for i in range(dim):
        full[:] = 0.0
        full[emb[i]] = 1.0
        f_state = hamiltonian(full)
        h_matrix[:, i] = f_state[emb]
    return h_matrix


def diagonalize_block(hamiltonian: OperatorMatrix, space: SubHilbertSpace) -> Eigensystem:
    h_matrix = block_matrix(hamiltonian, space)
    try:
        eigenvalues, eigenvectors = scipy.linalg.eigh(h_matrix)
    except (np.linalg.LinAlgError, ValueError) as e:
        raise DiagonalizationFailure(space.get_index(), str(e)) from e
    return Eigensystem(space.get_index(), eigenvalues, eigenvectors)


def ground_state_energy(eigensystems: List[Eigensystem]) -> float:
    """Global minimum eigenvalue over all blocks."""
    if not eigensystems:
        raise ValueError("No eigensystems")
    return min(es.ground_energy for es in eigensystems)


class BlockDiagonalizer:
    """
    Diagonalize the Hamiltonian block by block.

    Usage:
        diag = BlockDiagonalizer(H, partition.subspaces)
        eigensystems, gs_energy = diag.run()
    """

    def __init__(self, hamiltonian: OperatorMatrix, subspaces: List[SubHilbertSpace],
                 config: Optional[DecompositionConfig] = None):
        self.hamiltonian = hamiltonian
        self.subspaces = subspaces
        self.config = config or DecompositionConfig()

    def diagonalize(self) -> List[Eigensystem]:
        """Phase 1: raw eigensystems, one per block, in block order."""
        n_workers = self.config.n_workers
        if n_workers > 1 and len(self.subspaces) > 1:
            with ThreadPoolExecutor(max_workers=n_workers) as pool:
                return list(pool.map(lambda s: diagonalize_block(self.hamiltonian, s),
                                     self.subspaces))
        return [diagonalize_block(self.hamiltonian, s) for s in self.subspaces]

    def run(self):
        """
        Phase 1 then phase 2.

        Returns:
            (shifted eigensystems, ground-state energy before the shift)
        """
        raw = self.diagonalize()
        gs_energy = ground_state_energy(raw)
        shifted = [es.shifted(gs_energy) for es in raw]

        if self.config.verbose:
            print(f"🔬 Diagonalized {len(raw)} blocks, "
                  f"largest dim = {max(es.dim for es in raw)}")
            print(f"   E_gs = {gs_energy:.10f}")

        return shifted, gs_energy
