"""
CLI Utilities
=============

Common utilities shared across CLI commands.

Author: Masamichi Iizumi, Tamaki Iizumi
"""

import typer
import numpy as np
import json
from pathlib import Path
from typing import Any, List, Optional

from .. import __version__


def print_banner():
    """Print welcome banner."""
    typer.echo(f"""
╔═══════════════════════════════════════════════════════════════╗
║                      fock-sectors v{__version__:<8}                   ║
║     ~ Quantum-number blocks of fermionic Fock spaces ~        ║
╚═══════════════════════════════════════════════════════════════╝
    """)


def print_section(title: str, emoji: str = "📦"):
    """Print section header."""
    typer.echo(f"\n{emoji} {title}")
    typer.echo("─" * 50)


def print_key_value(key: str, value: Any, indent: int = 2):
    """Print key-value pair."""
    spaces = " " * indent
    typer.echo(f"{spaces}{key}: {value}")


def parse_names(text: str) -> List[str]:
    """'number, sz' -> ['number', 'sz'] (empty string -> [])"""
    return [s.strip().lower() for s in text.split(',') if s.strip()]


def save_json(data: dict, output: Path, default_serializer=None):
    """Save data to JSON file."""
    if default_serializer is None:
        default_serializer = lambda x: float(x) if isinstance(x, np.floating) else x

    output.write_text(json.dumps(data, indent=2, default=default_serializer))
    typer.echo(f"\n💾 Saved to {output}")


def error_exit(message: str, hint: Optional[str] = None):
    """Print error and exit."""
    typer.echo(f"❌ {message}", err=True)
    if hint:
        typer.echo(f"   {hint}", err=True)
    raise typer.Exit(1)
