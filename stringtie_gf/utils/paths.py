"""Helpers for normalising input and output paths.

Container mounts need a directory and a file name for every path, so each
path is resolved to its canonical absolute form (symlinks followed) before it
is split.
"""
from __future__ import annotations

from pathlib import Path

import structlog

from stringtie_gf.errors import PathResolutionError
from stringtie_gf.models import OutputLayout, ResolvedPath

log = structlog.get_logger()


def normalise(path: str | Path) -> ResolvedPath:
    """Return the canonical :class:`ResolvedPath` for *path*."""
    resolved = ResolvedPath.from_raw(path)
    log.debug("path.resolved", raw=str(path), full=str(resolved.full))
    return resolved


def output_layout(
    output: str,
    *,
    log_name: str = "_log",
    tmp_name: str = "_tmp",
) -> OutputLayout:
    """Return the output path and its sibling log/scratch directories.

    Args:
        output: Raw output directory path.
        log_name: Name of the log directory created next to *output*.
        tmp_name: Name of the scratch directory created next to *output*.

    Raises:
        PathResolutionError: If *output* is empty.
    """
    if not output:
        raise PathResolutionError("Output Directory required")
    resolved = normalise(output)
    return OutputLayout(
        output=resolved,
        log_dir=resolved.directory / log_name,
        tmp_dir=resolved.directory / tmp_name,
    )


__all__ = ["normalise", "output_layout"]
