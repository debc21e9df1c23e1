"""
Model Commands
==============

Decompose model Hamiltonians and print the block report.

Usage:
    fock-sectors hubbard -L 2 -t 1.0 -U 2.0 --qn number,sz
    fock-sectors anderson --bath 2 --eps-d -1.0 -U 2.0 -V 0.5 -o blocks.json

Author: Masamichi Iizumi, Tamaki Iizumi
"""

import typer
from pathlib import Path
from typing import Optional

from ..utils import (
    print_banner, print_section, print_key_value,
    parse_names, save_json, error_exit
)
from ...core import (
    DecompositionConfig,
    FockSectorsError,
    SortedSpaces,
    anderson_hamiltonian,
    hubbard_fops,
    hubbard_hamiltonian,
    conserved_quantities,
    spin_block_structure,
)


MAX_MODES = 14


def _decompose(H, fops, block_structure, qn: str, policy: str, workers: int,
               verbose: bool, output: Optional[Path]):
    if fops.n_operators() > MAX_MODES:
        error_exit(f"System too large: {fops.n_operators()} modes",
                   f"Max {MAX_MODES} modes (dim 2^{MAX_MODES})")

    names = parse_names(qn)
    try:
        qn_ops = conserved_quantities(fops, names)
        config = DecompositionConfig(key_policy=policy, n_workers=workers, verbose=verbose)
    except ValueError as e:
        error_exit(str(e))

    print_key_value("Modes", fops.n_operators())
    print_key_value("Hilbert space", f"2^{fops.n_operators()} = {fops.dimension():,}")
    print_key_value("Quantum numbers", ", ".join(names) if names else "(none)")

    try:
        ss = SortedSpaces(H, qn_ops, fops, block_structure=block_structure, config=config)
    except FockSectorsError as e:
        error_exit(str(e), "Check that the quantum numbers commute with the Hamiltonian")

    print_section("Blocks", "🧩")
    typer.echo(ss.report())
    print_key_value("E_gs (before shift)", f"{ss.get_gs_energy():.10f}", indent=0)

    if output:
        save_json(ss.to_dict(), output)
    return ss


def hubbard(
    sites: int = typer.Option(2, "-L", "--sites", help="Number of lattice sites"),
    t_hop: float = typer.Option(1.0, "-t", help="Hopping parameter"),
    U: float = typer.Option(2.0, "-U", help="Hubbard U (interaction strength)"),
    mu: float = typer.Option(0.0, "--mu", help="Chemical potential"),
    periodic: bool = typer.Option(False, "--periodic/--open", help="Boundary condition"),
    qn: str = typer.Option("number,sz", "--qn", help="Quantum numbers (comma separated)"),
    policy: str = typer.Option("tolerant", "--policy", help="Key policy: tolerant | rounded"),
    workers: int = typer.Option(1, "-j", "--workers", help="Worker threads"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Output JSON file"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose output"),
):
    """
    Decompose a Hubbard chain.

    Example:
        fock-sectors hubbard -L 3 -U 4.0 --qn number,sz
    """
    print_banner()
    print_section("Hubbard chain", "🚀")
    print_key_value("Sites (L)", sites)
    print_key_value("t / U / mu", f"{t_hop} / {U} / {mu}")

    if sites < 1:
        error_exit("Need at least one site")

    fops = hubbard_fops(sites)
    H = hubbard_hamiltonian(sites, t=t_hop, U=U, mu=mu, periodic=periodic)
    _decompose(H, fops, spin_block_structure(sites), qn, policy, workers, verbose, output)


def anderson(
    bath: int = typer.Option(2, "--bath", help="Bath levels per spin"),
    eps_d: float = typer.Option(-1.0, "--eps-d", help="Impurity level"),
    U: float = typer.Option(2.0, "-U", help="Impurity interaction"),
    V: float = typer.Option(0.5, "-V", help="Hybridization"),
    qn: str = typer.Option("number,sz", "--qn", help="Quantum numbers (comma separated)"),
    policy: str = typer.Option("tolerant", "--policy", help="Key policy: tolerant | rounded"),
    workers: int = typer.Option(1, "-j", "--workers", help="Worker threads"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Output JSON file"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose output"),
):
    """
    Decompose a single-impurity Anderson model.

    Example:
        fock-sectors anderson --bath 3 -U 3.0
    """
    print_banner()
    print_section("Anderson impurity", "🚀")
    print_key_value("Bath levels", bath)
    print_key_value("eps_d / U / V", f"{eps_d} / {U} / {V}")

    if bath < 0:
        error_exit("Bath size must be >= 0")

    fops = hubbard_fops(bath + 1)
    H = anderson_hamiltonian(bath, eps_d=eps_d, U=U, V=V)
    _decompose(H, fops, spin_block_structure(bath + 1), qn, policy, workers, verbose, output)
