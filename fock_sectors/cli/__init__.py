"""
fock-sectors CLI
================

Command-line interface for the block decomposition.

Usage:
    fock-sectors info
    fock-sectors hubbard --sites 2 --t 1.0 --U 2.0 --qn number,sz
    fock-sectors anderson --bath 2 --eps-d -1.0 --U 2.0 --V 0.5

Architecture:
    cli/
    ├── __init__.py       # This file - app definition
    ├── commands/         # Individual command modules
    │   ├── info.py
    │   └── models.py
    └── utils.py          # Shared utilities

Author: Masamichi Iizumi, Tamaki Iizumi
"""

import typer

# Create CLI app
app = typer.Typer(
    name="fock-sectors",
    help="Block decomposition of fermionic Fock spaces by quantum numbers",
    add_completion=False,
)


# =============================================================================
# Register Commands
# =============================================================================

from .commands import (
    info,
    hubbard,
    anderson,
)

app.command()(info)
app.command()(hubbard)
app.command()(anderson)


# =============================================================================
# Main Entry Point
# =============================================================================

def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
