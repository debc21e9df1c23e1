"""
Test SortedSpaces: the full decomposition
=========================================
Author: Masamichi Iizumi, Tamaki Iizumi
"""

import numpy as np
import pytest


class TestHubbardDimer:
    """2-site Hubbard with N and Sz."""

    @pytest.fixture
    def ss(self, hubbard_2site):
        from fock_sectors import SortedSpaces, spin_block_structure

        H, qn, fops = hubbard_2site
        return SortedSpaces(H, qn, fops, block_structure=spin_block_structure(2))

    def test_blocks(self, ss):
        assert ss.n_subspaces() == 9
        assert sum(ss.dimensions()) == 16
        assert sorted(ss.dimensions()) == [1, 1, 1, 1, 2, 2, 2, 2, 4]
        assert ss.quantum_numbers[0] == (0.0, 0.0)
        print("✅ Hubbard dimer blocks test passed")

    def test_ground_state_energy(self, ss):
        # N=2, Sz=0 singlet: U/2 - sqrt(U^2/4 + 4 t^2)
        assert np.isclose(ss.get_gs_energy(), 1.0 - np.sqrt(5.0))
        assert min(es.eigenvalues[0] for es in ss.get_eigensystems()) == 0.0

    def test_matches_full_diagonalization(self, ss, hubbard_2site):
        from fock_sectors import OperatorMatrix

        H, _, fops = hubbard_2site
        full = np.linalg.eigvalsh(OperatorMatrix(H, fops).matrix.toarray())
        blocks = np.sort(np.concatenate([es.eigenvalues for es in ss.eigensystems]))
        assert np.allclose(blocks, full - full[0])

    def test_shifted_hamiltonian(self, ss):
        for i in range(ss.n_subspaces()):
            evals = np.linalg.eigvalsh(ss.block_hamiltonian(i))
            assert np.allclose(evals, ss.eigensystems[i].eigenvalues)
        assert np.isclose(ss.hamiltonian.matrix.toarray()[0, 0], -ss.get_gs_energy())

    def test_round_trip_all_states(self, ss):
        for f in range(ss.full_space.dimension()):
            sp = ss.subspace(ss.find_subspace(f))
            assert sp.get_fock_state(sp.get_state_index(f)) == f
            assert ss.full_space.get_fock_state(ss.full_space.get_state_index(f)) == f

    def test_connectivity_accessors(self, ss):
        up0 = ss.mode_index(("up", 0))
        conn = ss.creation_connection(up0)
        assert len(conn) == ss.n_subspaces()
        assert conn[0] >= 0
        assert ss.destruction_connection(up0)[0] == -1
        assert ss.creation_operator(up0).connection(0) == conn[0]
        assert ss.destruction_operator(up0).direction == "destruction"

    def test_int_pair_to_n(self, ss):
        assert ss.int_pair_to_n == {(0, 0): 0, (0, 1): 1, (1, 0): 2, (1, 1): 3}

    def test_report(self, ss):
        text = str(ss)
        assert text.startswith("Number of blocks: 9")
        assert "Block 0, qn = 0 0 , size = 1" in text
        assert text.count("Relative gs energy") == 9

    def test_to_dict(self, ss):
        import json

        data = ss.to_dict()
        assert data['dimension'] == 16
        assert len(data['blocks']) == 9
        assert len(data['creation_connection']) == 4
        json.dumps(data)


class TestScenarios:

    def test_hopping_dimer(self, two_modes, hopping_2modes):
        from fock_sectors import SortedSpaces, n

        t, H = hopping_2modes
        ss = SortedSpaces(H, [n("a") + n("b")], two_modes)
        assert ss.dimensions() == [1, 2, 1]
        assert np.isclose(ss.get_gs_energy(), -t)
        assert np.allclose(ss.eigensystems[1].eigenvalues, [0.0, 2 * t])

    def test_no_quantum_numbers(self, hubbard_2site):
        from fock_sectors import SortedSpaces, OperatorMatrix

        H, _, fops = hubbard_2site
        ss = SortedSpaces(H, [], fops)
        assert ss.n_subspaces() == 1
        assert ss.dimensions() == [16]
        full = np.linalg.eigvalsh(OperatorMatrix(H, fops).matrix.toarray())
        assert np.allclose(ss.eigensystems[0].eigenvalues, full - full[0])
        for mode in range(fops.n_operators()):
            assert ss.creation_connection(mode).tolist() == [0]
            assert ss.destruction_connection(mode).tolist() == [0]

    def test_anderson(self):
        from fock_sectors import (
            SortedSpaces, anderson_hamiltonian, hubbard_fops, total_number, total_sz,
        )

        fops = hubbard_fops(3)
        ss = SortedSpaces(anderson_hamiltonian(2, U=3.0), [total_number(fops), total_sz(fops)], fops)
        assert sum(ss.dimensions()) == 64
        # (N, Sz) sectors of 3 spatial orbitals
        assert ss.n_subspaces() == 16

    def test_rounded_policy_same_blocks(self, hubbard_2site):
        from fock_sectors import SortedSpaces, DecompositionConfig

        H, qn, fops = hubbard_2site
        a = SortedSpaces(H, qn, fops)
        b = SortedSpaces(H, qn, fops, config=DecompositionConfig(key_policy="rounded", n_workers=2))
        assert [s.fock_states for s in a.subspaces] == [s.fock_states for s in b.subspaces]
        assert np.isclose(a.get_gs_energy(), b.get_gs_energy())


class TestErrors:

    def test_inconsistent_quantum_numbers(self, hubbard_2site):
        from fock_sectors import SortedSpaces, InconsistentBlockStructure, n

        H, _, fops = hubbard_2site
        with pytest.raises(InconsistentBlockStructure):
            SortedSpaces(H, [n("up", 0) * n("dn", 0)], fops)

    def test_unknown_mode(self, two_modes):
        from fock_sectors import SortedSpaces, n

        with pytest.raises(KeyError):
            SortedSpaces(n("z"), [], two_modes)

    def test_bad_config(self):
        from fock_sectors import DecompositionConfig

        with pytest.raises(ValueError):
            DecompositionConfig(key_policy="fuzzy")
        with pytest.raises(ValueError):
            DecompositionConfig(n_workers=0)
