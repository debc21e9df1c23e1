"""
fock-sectors
============

Block decomposition of fermionic Fock spaces by conserved quantum
numbers, with per-block diagonalization of the Hamiltonian.

Preprocessing step for impurity solvers that repeatedly apply the
Hamiltonian and c† / c: the Fock space of N modes is split into
blocks of equal quantum numbers, the block → block maps of every
creation/annihilation operator are tabulated, and each block is
diagonalized independently (spectra shifted so that E_gs = 0).

Pipeline:
  Fock space (2^N) → quantum numbers → blocks → connectivity → eigensystems

Structure:
  fock_sectors/
  ├── core/
  │   ├── fundamental_operators.py  # Mode labels ↔ linear index
  │   ├── operators.py              # c, c†, n, sparse matrices
  │   ├── hilbert_space.py          # Full space, blocks
  │   ├── quantum_numbers.py        # qn evaluation + keying
  │   ├── partition.py              # Block registry
  │   ├── connectivity.py           # c† / c block maps
  │   ├── models.py                 # Hubbard, Anderson
  │   └── sorted_spaces.py          # The full decomposition
  ├── solvers/
  │   └── block_diag.py             # Per-block eigh + E_gs shift
  ├── cli/                           # fock-sectors command
  └── tests/

Example:
    >>> from fock_sectors import *
    >>> fops = hubbard_fops(2)
    >>> ss = SortedSpaces(hubbard_hamiltonian(2), [total_number(fops), total_sz(fops)], fops)
    >>> ss.n_subspaces()
    9

Author: Masamichi Iizumi, Tamaki Iizumi
"""

__version__ = "0.1.0"

# =============================================================================
# Core Components
# =============================================================================

from .core.exceptions import (
    FockSectorsError,
    IndexOutOfRange,
    InconsistentBlockStructure,
    DiagonalizationFailure,
)

from .core.config import DecompositionConfig

from .core.fundamental_operators import (
    BlockDescriptor,
    FundamentalOperatorSet,
)

from .core.operators import (
    ManyBodyOperator,
    OperatorMatrix,
    c,
    c_dag,
    n,
)

from .core.hilbert_space import (
    HilbertSpace,
    SubHilbertSpace,
    BlockState,
)

from .core.quantum_numbers import QuantumNumberEvaluator

from .core.partition import (
    Partition,
    SubspacePartitioner,
)

from .core.connectivity import (
    BlockOperator,
    ConnectivityGraphBuilder,
)

from .core.models import (
    hubbard_fops,
    hubbard_hamiltonian,
    anderson_hamiltonian,
    spin_block_structure,
    total_number,
    total_sz,
)

from .core.sorted_spaces import SortedSpaces

# =============================================================================
# Solvers
# =============================================================================

from .solvers.block_diag import (
    BlockDiagonalizer,
    Eigensystem,
)


__all__ = [
    '__version__',

    # Errors
    'FockSectorsError',
    'IndexOutOfRange',
    'InconsistentBlockStructure',
    'DiagonalizationFailure',

    # Config
    'DecompositionConfig',

    # Modes / operators
    'BlockDescriptor',
    'FundamentalOperatorSet',
    'ManyBodyOperator',
    'OperatorMatrix',
    'c',
    'c_dag',
    'n',

    # Spaces
    'HilbertSpace',
    'SubHilbertSpace',
    'BlockState',

    # Decomposition steps
    'QuantumNumberEvaluator',
    'Partition',
    'SubspacePartitioner',
    'BlockOperator',
    'ConnectivityGraphBuilder',
    'BlockDiagonalizer',
    'Eigensystem',
    'SortedSpaces',

    # Models
    'hubbard_fops',
    'hubbard_hamiltonian',
    'anderson_hamiltonian',
    'spin_block_structure',
    'total_number',
    'total_sz',
]
