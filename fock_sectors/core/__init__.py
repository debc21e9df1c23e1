"""
fock-sectors Core Components
============================

Modules:
  - fundamental_operators: Mode labels and linear indices
  - operators: Many-body operator expressions and sparse matrices
  - hilbert_space: Full Fock space, blocks, block states
  - quantum_numbers: Quantum-number evaluation and keying
  - partition: Partition of the Fock space into blocks
  - connectivity: Block connectivity of c† / c
  - models: Hubbard / Anderson Hamiltonians, conserved quantities
  - sorted_spaces: The full decomposition

Author: Masamichi Iizumi, Tamaki Iizumi
"""

from .exceptions import (
    FockSectorsError,
    IndexOutOfRange,
    InconsistentBlockStructure,
    DiagonalizationFailure,
)

from .config import DecompositionConfig

from .fundamental_operators import (
    BlockDescriptor,
    FundamentalOperatorSet,
)

from .operators import (
    ManyBodyOperator,
    OperatorMatrix,
    c,
    c_dag,
    n,
)

from .hilbert_space import (
    HilbertSpace,
    SubHilbertSpace,
    BlockState,
)

from .quantum_numbers import (
    QuantumNumberEvaluator,
    TolerantKeyMap,
    RoundedKeyMap,
    tolerant_less,
    make_key_map,
)

from .partition import (
    Partition,
    SubspacePartitioner,
)

from .connectivity import (
    BlockOperator,
    Connectivity,
    ConnectivityGraphBuilder,
    CREATION,
    DESTRUCTION,
)

from .models import (
    hubbard_fops,
    hubbard_hamiltonian,
    anderson_hamiltonian,
    spin_block_structure,
    total_number,
    total_sz,
    conserved_quantities,
)

# Imports solvers/, keep last
from .sorted_spaces import SortedSpaces


__all__ = [
    # Errors
    'FockSectorsError',
    'IndexOutOfRange',
    'InconsistentBlockStructure',
    'DiagonalizationFailure',

    # Config
    'DecompositionConfig',

    # Modes
    'BlockDescriptor',
    'FundamentalOperatorSet',

    # Operators
    'ManyBodyOperator',
    'OperatorMatrix',
    'c',
    'c_dag',
    'n',

    # Spaces
    'HilbertSpace',
    'SubHilbertSpace',
    'BlockState',

    # Quantum numbers
    'QuantumNumberEvaluator',
    'TolerantKeyMap',
    'RoundedKeyMap',
    'tolerant_less',
    'make_key_map',

    # Partition / connectivity
    'Partition',
    'SubspacePartitioner',
    'BlockOperator',
    'Connectivity',
    'ConnectivityGraphBuilder',
    'CREATION',
    'DESTRUCTION',

    # Models
    'hubbard_fops',
    'hubbard_hamiltonian',
    'anderson_hamiltonian',
    'spin_block_structure',
    'total_number',
    'total_sz',
    'conserved_quantities',

    # Decomposition
    'SortedSpaces',
]
