"""
Public façade for the *utils* package.

Anything imported here becomes part of the stable public API.
"""

from __future__ import annotations

from .paths import normalise, output_layout
from .shell import run_shell

__all__ = ["normalise", "output_layout", "run_shell"]
