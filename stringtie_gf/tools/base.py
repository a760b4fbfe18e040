"""Base classes for containerised tools."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from stringtie_gf.engines import ExecutionEngine
from stringtie_gf.models import ExternalCommand, MountSpec


@dataclass
class ToolSpec:
    """Specification returned by :meth:`Tool.build_spec`.

    Engines wrap it into an :class:`~stringtie_gf.models.ExternalCommand`.
    """

    image: str
    args: Sequence[str]
    mounts: Sequence[MountSpec] = field(default_factory=list)
    stdout_log: Path | None = None
    stderr_log: Path | None = None


class Tool:
    """Base class for wrappers around external utilities."""

    def execute(self, engine: ExecutionEngine) -> ExternalCommand:
        """Build a :class:`ToolSpec` and execute it with *engine*."""
        return engine.run(self.build_spec())

    def command(self, engine: ExecutionEngine) -> ExternalCommand:
        """Return the command *engine* would run, without running it."""
        return engine.build_command(self.build_spec())

    def build_spec(self) -> ToolSpec:
        """Return a :class:`ToolSpec` describing how to run this tool."""
        raise NotImplementedError
