"""
Model Hamiltonians for fock-sectors
===================================

Fermionic Hamiltonians and conserved quantities as ManyBodyOperator
expressions.

Supported Models:
  - Hubbard chain:  H = -t Σ_{⟨i,j⟩,σ} (c†_iσ c_jσ + h.c.) + U Σ n_i↑ n_i↓ - μ Σ n_iσ
  - Anderson impurity:
        H = ε_d Σ_σ n_dσ + U n_d↑ n_d↓ + Σ_kσ ε_k n_kσ + V Σ_kσ (c†_dσ c_kσ + h.c.)

Quantum numbers:
  - total_number: N = Σ n
  - total_sz:     Sz = ½ Σ (n_↑ - n_↓)

Mode labels are (spin, index) with spin in {'up', 'dn'}; for the
Anderson model index 0 is the impurity and 1..n_bath the bath.

Author: Masamichi Iizumi, Tamaki Iizumi
"""

import numpy as np
from typing import List, Optional, Sequence, Tuple

from .fundamental_operators import BlockDescriptor, FundamentalOperatorSet
from .operators import ManyBodyOperator, c, c_dag, n


SPINS = ("up", "dn")


# =============================================================================
# Mode sets
# =============================================================================

def spin_block_structure(n_orbitals: int) -> List[BlockDescriptor]:
    """Two blocks, 'up' and 'dn', of n_orbitals modes each."""
    return [BlockDescriptor(s, list(range(n_orbitals))) for s in SPINS]


def hubbard_fops(n_sites: int) -> FundamentalOperatorSet:
    return FundamentalOperatorSet.from_block_structure(spin_block_structure(n_sites))


def chain_bonds(n_sites: int, periodic: bool = False) -> List[Tuple[int, int]]:
    bonds = [(i, i + 1) for i in range(n_sites - 1)]
    if periodic and n_sites > 2:
        bonds.append((n_sites - 1, 0))
    return bonds


# =============================================================================
# Hamiltonians
# =============================================================================

def hopping(label_i, label_j, t: float = 1.0) -> ManyBodyOperator:
    """-t (c†_i c_j + c†_j c_i)"""
    return -t * (c_dag(label_i) * c(label_j) + c_dag(label_j) * c(label_i))


def hubbard_hamiltonian(n_sites: int, t: float = 1.0, U: float = 2.0, mu: float = 0.0,
                        periodic: bool = False) -> ManyBodyOperator:
    """Hubbard chain on n_sites sites (2 * n_sites modes)."""
    H = ManyBodyOperator()
    for (i, j) in chain_bonds(n_sites, periodic):
        for s in SPINS:
            H += hopping((s, i), (s, j), t)
    for i in range(n_sites):
        H += U * n("up", i) * n("dn", i)
        if mu != 0.0:
            H -= mu * (n("up", i) + n("dn", i))
    return H


def anderson_hamiltonian(n_bath: int, eps_d: float = -1.0, U: float = 2.0, V: float = 0.5,
                         eps_bath: Optional[Sequence[float]] = None) -> ManyBodyOperator:
    """
    Single-impurity Anderson model with a discrete bath.

    Args:
        n_bath: Number of bath levels per spin
        eps_d: Impurity level
        U: Impurity on-site repulsion
        V: Hybridization
        eps_bath: Bath levels (default: evenly spaced in [-1, 1])
    """
    if eps_bath is None:
        eps_bath = np.linspace(-1.0, 1.0, n_bath) if n_bath > 1 else [0.0] * n_bath
    if len(eps_bath) != n_bath:
        raise ValueError(f"Expected {n_bath} bath levels, got {len(eps_bath)}")

    H = U * n("up", 0) * n("dn", 0)
    for s in SPINS:
        H += eps_d * n(s, 0)
        for k, eps_k in enumerate(eps_bath, start=1):
            H += float(eps_k) * n(s, k)
            H += hopping((s, 0), (s, k), -V)
    return H


# =============================================================================
# Conserved quantities
# =============================================================================

def total_number(fops: FundamentalOperatorSet) -> ManyBodyOperator:
    N = ManyBodyOperator()
    for label, _ in fops:
        N += n(label)
    return N


def total_sz(fops: FundamentalOperatorSet, up: str = "up", dn: str = "dn") -> ManyBodyOperator:
    Sz = ManyBodyOperator()
    for label, _ in fops:
        if label[0] == up:
            Sz += 0.5 * n(label)
        elif label[0] == dn:
            Sz -= 0.5 * n(label)
    return Sz


QUANTUM_NUMBERS = {
    "number": total_number,
    "sz": total_sz,
}


def conserved_quantities(fops: FundamentalOperatorSet, names: Sequence[str]) -> List[ManyBodyOperator]:
    """Conserved quantities by name ('number', 'sz')."""
    ops = []
    for name in names:
        try:
            ops.append(QUANTUM_NUMBERS[name](fops))
        except KeyError:
            raise ValueError(f"Unknown quantum number: {name}. Use: {list(QUANTUM_NUMBERS)}") from None
    return ops
