"""
CLI Commands
============

Commands:
  - info: Show version and pipeline information
  - hubbard: Decompose a Hubbard chain
  - anderson: Decompose a single-impurity Anderson model

Author: Masamichi Iizumi, Tamaki Iizumi
"""

from .info import info
from .models import hubbard, anderson

__all__ = [
    'info',
    'hubbard',
    'anderson',
]
