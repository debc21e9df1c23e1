"""
fock-sectors Test Configuration
"""

import pytest
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))


@pytest.fixture
def two_modes():
    """Two spinless modes 'a', 'b'"""
    from fock_sectors import FundamentalOperatorSet
    return FundamentalOperatorSet(["a", "b"])


@pytest.fixture
def hopping_2modes():
    """-t (c†_a c_b + h.c.) with t = 0.7"""
    from fock_sectors import c, c_dag
    t = 0.7
    return t, -t * (c_dag("a") * c("b") + c_dag("b") * c("a"))


@pytest.fixture
def hubbard_2site():
    """2-site Hubbard dimer with N and Sz"""
    from fock_sectors import hubbard_fops, hubbard_hamiltonian, total_number, total_sz
    fops = hubbard_fops(2)
    H = hubbard_hamiltonian(2, t=1.0, U=2.0)
    return H, [total_number(fops), total_sz(fops)], fops


def pytest_configure(config):
    """Configure pytest"""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
