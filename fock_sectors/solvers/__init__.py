"""
fock-sectors Solvers
====================

Modules:
  - block_diag: Per-block dense diagonalization and ground-state shift

Author: Masamichi Iizumi, Tamaki Iizumi
"""

from .block_diag import (
    BlockDiagonalizer,
    Eigensystem,
    block_matrix,
    diagonalize_block,
    ground_state_energy,
)

__all__ = [
    'BlockDiagonalizer',
    'Eigensystem',
    'block_matrix',
    'diagonalize_block',
    'ground_state_energy',
]
