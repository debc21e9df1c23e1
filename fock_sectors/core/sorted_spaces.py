"""
Sorted Spaces
=============

Block decomposition of a fermionic Fock space.

Pipeline (single initialization pass, read-only afterwards):
  1. HilbertSpace              full space, index == Fock state
  2. QuantumNumberEvaluator    qn(s) = ⟨s|Q_k|s⟩
  3. SubspacePartitioner       blocks of equal quantum numbers
  4. ConnectivityGraphBuilder  c†_n / c_n block → block maps
  5. BlockDiagonalizer         per-block eigensystems, E_gs shifted to 0

Construction either succeeds with a complete decomposition or raises
one of IndexOutOfRange, InconsistentBlockStructure,
DiagonalizationFailure.

Usage:
    fops = hubbard_fops(2)
    ss = SortedSpaces(hubbard_hamiltonian(2), [total_number(fops)], fops)
    print(ss)

Author: Masamichi Iizumi, Tamaki Iizumi
"""

import numpy as np
from typing import Any, Dict, List, Optional, Sequence

from .config import DecompositionConfig
from .connectivity import BlockOperator, ConnectivityGraphBuilder
from .fundamental_operators import BlockDescriptor, FundamentalOperatorSet
from .hilbert_space import HilbertSpace, SubHilbertSpace
from .operators import ManyBodyOperator, OperatorMatrix
from .partition import SubspacePartitioner
from .quantum_numbers import QuantumNumberEvaluator, QuantumNumbers
from ..solvers.block_diag import BlockDiagonalizer, Eigensystem, block_matrix


class SortedSpaces:
    """
    Hamiltonian, creation and destruction operators sorted into blocks.

    Args:
        hamiltonian: Hamiltonian expression
        qn_operators: Conserved quantities (may be empty)
        fops: Fundamental operator set
        block_structure: Optional block descriptors, only used to build
                         the (block, offset) → mode lookup
        config: Decomposition configuration

    Attributes:
        full_space: Full Hilbert space
        quantum_numbers: Canonical quantum numbers of each block
        eigensystems: Shifted eigensystems, one per block
        hamiltonian: Shifted Hamiltonian (H - E_gs) as OperatorMatrix
        int_pair_to_n: (block, offset) → linear mode index
    """

    def __init__(self,
                 hamiltonian: ManyBodyOperator,
                 qn_operators: Sequence[ManyBodyOperator],
                 fops: FundamentalOperatorSet,
                 block_structure: Optional[List[BlockDescriptor]] = None,
                 config: Optional[DecompositionConfig] = None):
        self.config = config or DecompositionConfig()
        self.fops = fops
        self.int_pair_to_n: Dict = fops.block_lookup(block_structure)

        unknown = hamiltonian.labels() - set(fops.labels())
        if unknown:
            raise KeyError(f"Hamiltonian uses modes not in the operator set: {sorted(unknown, key=str)}")

        if self.config.verbose:
            print(f"🚀 SortedSpaces: N={fops.n_operators()}, Dim={fops.dimension():,}, "
                  f"{len(qn_operators)} quantum numbers")

        # Quantum numbers and partition
        self._evaluator = QuantumNumberEvaluator(qn_operators, fops)
        partitioner = SubspacePartitioner(fops, qn_operators, self.config, evaluator=self._evaluator)
        self._partition = partitioner.run()

        # Block connectivity of c† / c
        self._connectivity = ConnectivityGraphBuilder(
            fops, self._partition, self._evaluator, partitioner.resolve, self.config
        ).build()

        # Eigensystems, shifted so that the ground state has zero energy
        h_matrix = OperatorMatrix(hamiltonian, fops)
        self.eigensystems, self.gs_energy = BlockDiagonalizer(
            h_matrix, self._partition.subspaces, self.config
        ).run()
        self.hamiltonian = OperatorMatrix(hamiltonian - self.gs_energy, fops)

    # =========================================================================
    # Blocks
    # =========================================================================

    @property
    def full_space(self) -> HilbertSpace:
        return self._partition.full_space

    @property
    def subspaces(self) -> List[SubHilbertSpace]:
        return list(self._partition.subspaces)

    @property
    def quantum_numbers(self) -> List[QuantumNumbers]:
        return list(self._partition.quantum_numbers)

    def n_subspaces(self) -> int:
        return self._partition.n_subspaces()

    def subspace(self, i: int) -> SubHilbertSpace:
        return self._partition.subspaces[i]

    def find_subspace(self, f: int) -> int:
        """Block index of a Fock state."""
        return self._partition.find_subspace(f)

    def dimensions(self) -> List[int]:
        return self._partition.dimensions()

    # =========================================================================
    # Connectivity
    # =========================================================================

    def creation_connection(self, mode: int) -> np.ndarray:
        return self._connectivity.creation_connection[mode]

    def destruction_connection(self, mode: int) -> np.ndarray:
        return self._connectivity.destruction_connection[mode]

    def creation_operator(self, mode: int) -> BlockOperator:
        return self._connectivity.creation_operators[mode]

    def destruction_operator(self, mode: int) -> BlockOperator:
        return self._connectivity.destruction_operators[mode]

    def mode_index(self, label) -> int:
        return self.fops.linear_index(label)

    # =========================================================================
    # Spectrum
    # =========================================================================

    def get_eigensystems(self) -> List[Eigensystem]:
        return self.eigensystems

    def get_gs_energy(self) -> float:
        """Ground-state energy subtracted from every eigenvalue."""
        return self.gs_energy

    def block_hamiltonian(self, i: int) -> np.ndarray:
        """Dense shifted Hamiltonian of block i in its local basis."""
        return block_matrix(self.hamiltonian, self.subspace(i))

    # =========================================================================
    # Report
    # =========================================================================

    def report(self) -> str:
        lines = [f"Number of blocks: {self.n_subspaces()}"]
        for i, sp in enumerate(self._partition.subspaces):
            qn = " ".join(f"{x:g}" for x in self._partition.quantum_numbers[i])
            lines.append(f"Block {i}, qn = {qn} , size = {sp.dimension()} "
                         f"Relative gs energy : {self.eigensystems[i].eigenvalues[0]:.10g}")
        return "\n".join(lines)

    __str__ = report

    def to_dict(self) -> Dict[str, Any]:
        return {
            'n_modes': self.fops.n_operators(),
            'dimension': self.full_space.dimension(),
            'gs_energy': float(self.gs_energy),
            'blocks': [
                {
                    'index': i,
                    'quantum_numbers': [float(x) for x in self._partition.quantum_numbers[i]],
                    'dimension': sp.dimension(),
                    'eigenvalues': [float(e) for e in self.eigensystems[i].eigenvalues],
                }
                for i, sp in enumerate(self._partition.subspaces)
            ],
            'creation_connection': [conn.tolist() for conn in self._connectivity.creation_connection],
            'destruction_connection': [conn.tolist() for conn in self._connectivity.destruction_connection],
        }

    def __repr__(self) -> str:
        return (f"SortedSpaces(N={self.fops.n_operators()}, blocks={self.n_subspaces()}, "
                f"E_gs={self.gs_energy:.6g})")
