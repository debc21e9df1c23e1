"""
Test Quantum Numbers: evaluation and keying policies
====================================================
Author: Masamichi Iizumi, Tamaki Iizumi
"""

import numpy as np
import pytest


class TestEvaluator:

    def test_expectation_values(self, two_modes):
        from fock_sectors import QuantumNumberEvaluator, n

        ev = QuantumNumberEvaluator([n("a") + n("b"), n("a") - n("b")], two_modes)
        assert ev.evaluate_fock_state(0) == (0.0, 0.0)
        assert ev.evaluate_fock_state(1) == (1.0, 1.0)
        assert ev.evaluate_fock_state(2) == (1.0, -1.0)
        assert ev.evaluate_fock_state(3) == (2.0, 0.0)

    def test_sign_does_not_matter(self, two_modes):
        from fock_sectors import QuantumNumberEvaluator, n

        ev = QuantumNumberEvaluator([n("a") + n("b")], two_modes)
        assert ev.evaluate(np.array([0.0, 0.0, 0.0, -1.0])) == (2.0,)

    def test_empty_list(self, two_modes):
        from fock_sectors import QuantumNumberEvaluator

        ev = QuantumNumberEvaluator([], two_modes)
        assert ev.evaluate_fock_state(3) == ()

    def test_null_vector(self, two_modes):
        from fock_sectors import QuantumNumberEvaluator, n

        ev = QuantumNumberEvaluator([n("a")], two_modes)
        with pytest.raises(ValueError):
            ev.evaluate(np.zeros(4))


class TestKeyMaps:

    def test_tolerant_less(self):
        from fock_sectors.core import tolerant_less

        assert tolerant_less((0.0, 1.0), (0.0, 2.0))
        assert not tolerant_less((1.0,), (1.0 + 1e-10,))
        assert not tolerant_less((1.0 + 1e-10,), (1.0,))
        assert tolerant_less((1.0,), (1.0 + 1e-6,))

    def test_tolerant_map_merges_close_vectors(self):
        from fock_sectors.core import TolerantKeyMap

        km = TolerantKeyMap(1e-8)
        km.insert((1.0, 0.5), 0)
        km.insert((0.0, 0.5), 1)
        km.insert((2.0, -0.5), 2)
        assert km.lookup((1.0 + 1e-12, 0.5 - 1e-12)) == 0
        assert km.lookup((0.0, 0.5)) == 1
        assert km.lookup((2.0, -0.5)) == 2
        assert km.lookup((2.0, 0.5)) is None
        assert len(km) == 3

    def test_rounded_map(self):
        from fock_sectors.core import RoundedKeyMap

        km = RoundedKeyMap(decimals=6)
        km.insert((0.0, 1.0), 4)
        assert km.lookup((-0.0, 1.0 + 1e-9)) == 4
        assert km.lookup((0.0, 1.001)) is None

    def test_unknown_policy(self):
        from fock_sectors.core import make_key_map

        with pytest.raises(ValueError):
            make_key_map("fuzzy")
