"""
Info Command
============

Show version and pipeline information.

Usage:
    fock-sectors info

Author: Masamichi Iizumi, Tamaki Iizumi
"""

import typer
from ..utils import print_banner, print_section, print_key_value
from ... import __version__
from ...core.models import QUANTUM_NUMBERS


def info():
    """Show version and pipeline information."""
    print_banner()

    print_section("Package Information", "📦")
    print_key_value("Version", __version__)
    print_key_value("Package", "fock-sectors")

    print_section("Pipeline", "🧩")
    print_key_value("1. HilbertSpace", "Full Fock space, index == state")
    print_key_value("2. QuantumNumberEvaluator", "qn = <s|Q|s>")
    print_key_value("3. SubspacePartitioner", "Blocks of equal quantum numbers")
    print_key_value("4. ConnectivityGraphBuilder", "c† / c block maps")
    print_key_value("5. BlockDiagonalizer", "Per-block eigh, E_gs → 0")

    print_section("Quantum Numbers", "🔢")
    typer.echo(f"  {', '.join(QUANTUM_NUMBERS)}")
