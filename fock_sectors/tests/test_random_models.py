"""
Test Random Conserving Hamiltonians
===================================

Seeded random spin-preserving hoppings and density-density
interactions: N and Sz are conserved for every draw.

Author: Masamichi Iizumi, Tamaki Iizumi
"""

import numpy as np
import pytest


def _random_conserving(n_orb, seed):
    from fock_sectors import ManyBodyOperator, c, c_dag, n
    from fock_sectors.core.models import SPINS

    np.random.seed(seed)
    H = ManyBodyOperator()
    for i in range(n_orb):
        for s in SPINS:
            H += float(np.random.randn()) * n(s, i)
        for j in range(i + 1, n_orb):
            for s in SPINS:
                t = float(np.random.randn())
                H += t * (c_dag(s, i) * c(s, j) + c_dag(s, j) * c(s, i))
    for i in range(n_orb):
        for j in range(n_orb):
            U = float(np.random.uniform(0.0, 2.0))
            H += U * n("up", i) * n("dn", j)
    return H


@pytest.fixture
def random_model(request):
    from fock_sectors import (
        SortedSpaces, hubbard_fops, spin_block_structure, total_number, total_sz,
    )

    n_orb, seed = request.param
    fops = hubbard_fops(n_orb)
    H = _random_conserving(n_orb, seed)
    ss = SortedSpaces(H, [total_number(fops), total_sz(fops)], fops,
                      block_structure=spin_block_structure(n_orb))
    return ss, H, fops


CASES = [(n_orb, seed) for n_orb in (1, 2, 3, 4, 5) for seed in (42, 7)]


@pytest.mark.parametrize("random_model", CASES, indirect=True,
                         ids=[f"orb{o}-seed{s}" for o, s in CASES])
class TestRandomConserving:
    """Decomposition invariants over random N, Sz conserving models."""

    def test_blocks_cover_fock_space(self, random_model):
        ss, _, fops = random_model
        states = sorted(f for sp in ss.subspaces for f in sp.fock_states)
        assert states == list(range(fops.dimension()))
        # One block per (N, Sz) sector
        n_orb = fops.n_operators() // 2
        assert ss.n_subspaces() == (n_orb + 1) ** 2

    def test_connections_shift_quantum_numbers(self, random_model):
        ss, _, fops = random_model
        qn = ss.quantum_numbers
        for mode in range(fops.n_operators()):
            dsz = 0.5 if fops.label(mode)[0] == "up" else -0.5
            for b, target in enumerate(ss.creation_connection(mode)):
                if target < 0:
                    continue
                assert np.isclose(qn[target][0], qn[b][0] + 1)
                assert np.isclose(qn[target][1], qn[b][1] + dsz)
                assert ss.destruction_connection(mode)[target] == b

    def test_eigenvectors_orthonormal(self, random_model):
        ss, _, _ = random_model
        for es in ss.get_eigensystems():
            U = es.eigenvectors
            assert np.allclose(U.T @ U, np.eye(es.dim), atol=1e-10)
            states = es.eigenstates
            assert np.isclose(states[0].dot(states[-1]), float(es.dim == 1))

    def test_ground_state_shift(self, random_model):
        ss, _, _ = random_model
        lowest = [es.eigenvalues[0] for es in ss.get_eigensystems()]
        assert min(lowest) == 0.0
        assert all(np.all(np.diff(es.eigenvalues) >= -1e-12) for es in ss.get_eigensystems())

    def test_matches_full_spectrum(self, random_model):
        from fock_sectors import OperatorMatrix

        ss, H, fops = random_model
        if fops.n_operators() > 6:
            pytest.skip("full diagonalization only for small systems")
        full = np.linalg.eigvalsh(OperatorMatrix(H, fops).matrix.toarray())
        blocks = np.sort(np.concatenate([es.eigenvalues for es in ss.get_eigensystems()]))
        assert np.allclose(blocks, full - full[0])
