"""
Test Subspace Partitioner: complete, disjoint, deterministic
============================================================
Author: Masamichi Iizumi, Tamaki Iizumi
"""

import numpy as np
import pytest


class TestTwoModes:
    """2 modes, occupation number as the quantum number."""

    def test_blocks(self, two_modes):
        from fock_sectors import SubspacePartitioner, n

        part = SubspacePartitioner(two_modes, [n("a") + n("b")]).run()
        assert part.n_subspaces() == 3
        assert part.dimensions() == [1, 2, 1]
        assert [sp.fock_states for sp in part.subspaces] == [(0,), (1, 2), (3,)]
        assert part.quantum_numbers == [(0.0,), (1.0,), (2.0,)]
        assert [part.find_subspace(f) for f in range(4)] == [0, 1, 1, 2]

    def test_empty_quantum_numbers(self, two_modes):
        from fock_sectors import SubspacePartitioner

        part = SubspacePartitioner(two_modes, []).run()
        assert part.n_subspaces() == 1
        assert part.subspaces[0].fock_states == (0, 1, 2, 3)
        assert part.quantum_numbers == [()]


class TestPartitionProperties:
    """Invariants on a larger mode set."""

    @pytest.mark.parametrize("policy", ["tolerant", "rounded"])
    def test_complete_and_disjoint(self, hubbard_2site, policy):
        from fock_sectors import SubspacePartitioner, DecompositionConfig

        _, qn, fops = hubbard_2site
        part = SubspacePartitioner(fops, qn, DecompositionConfig(key_policy=policy)).run()

        all_states = [f for sp in part.subspaces for f in sp.fock_states]
        assert sorted(all_states) == list(range(fops.dimension()))
        assert sum(part.dimensions()) == 2 ** fops.n_operators()
        assert part.n_subspaces() == 9

        for b, sp in enumerate(part.subspaces):
            assert sp.get_index() == b
            for i in range(sp.dimension()):
                f = sp.get_fock_state(i)
                assert sp.get_state_index(f) == i
                assert part.find_subspace(f) == b

    def test_policies_agree(self, hubbard_2site):
        from fock_sectors import SubspacePartitioner, DecompositionConfig

        _, qn, fops = hubbard_2site
        p1 = SubspacePartitioner(fops, qn, DecompositionConfig(key_policy="tolerant")).run()
        p2 = SubspacePartitioner(fops, qn, DecompositionConfig(key_policy="rounded")).run()
        assert [s.fock_states for s in p1.subspaces] == [s.fock_states for s in p2.subspaces]

    def test_deterministic(self, hubbard_2site):
        from fock_sectors import SubspacePartitioner

        _, qn, fops = hubbard_2site
        runs = [SubspacePartitioner(fops, qn).run() for _ in range(2)]
        assert [s.fock_states for s in runs[0].subspaces] == [s.fock_states for s in runs[1].subspaces]
        assert runs[0].quantum_numbers == runs[1].quantum_numbers

    def test_quantum_numbers_in_block(self, hubbard_2site):
        from fock_sectors import SubspacePartitioner, QuantumNumberEvaluator

        _, qn, fops = hubbard_2site
        part = SubspacePartitioner(fops, qn).run()
        ev = QuantumNumberEvaluator(qn, fops)
        for b, sp in enumerate(part.subspaces):
            for f in sp.fock_states:
                assert np.allclose(ev.evaluate_fock_state(f), part.quantum_numbers[b])

    def test_first_seen_is_canonical(self, two_modes):
        from fock_sectors import SubspacePartitioner, n

        # 1e-10 splitting between the two singly occupied states is below tolerance
        Q = n("a") + (1.0 + 1e-10) * n("b")
        part = SubspacePartitioner(two_modes, [Q]).run()
        assert part.dimensions() == [1, 2, 1]
        assert part.quantum_numbers[1] == (1.0,)
