"""Execution back-ends for running containerised tools."""

from __future__ import annotations

import shutil
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, ClassVar, Optional

from stringtie_gf.models import ExternalCommand
from stringtie_gf.utils.shell import run_shell

if TYPE_CHECKING:  # pragma: no cover
    from stringtie_gf.tools.base import ToolSpec

Which = Callable[[str], Optional[str]]


class ExecutionEngine(ABC):
    """Abstract execution engine.

    Concrete implementations turn a :class:`~stringtie_gf.tools.base.ToolSpec`
    into one :class:`ExternalCommand` and run it. The interface is small so
    that new engines can be added without touching the tool wrappers.

    Attributes:
        name: Method name accepted by ``--exec_method``.
        binary: Executable whose presence on ``PATH`` makes the engine
            available to ``auto`` detection.
    """

    name: ClassVar[str]
    binary: ClassVar[str]

    @classmethod
    def available(cls, which: Optional[Which] = None) -> bool:
        """Return ``True`` when :attr:`binary` can be found on ``PATH``.

        Args:
            which: Lookup function, :func:`shutil.which` when omitted.
        """
        which = which or shutil.which
        return which(cls.binary) is not None

    @abstractmethod
    def build_command(self, spec: "ToolSpec") -> ExternalCommand:
        """Return the command that runs *spec* with this engine."""
        raise NotImplementedError

    def run(self, spec: "ToolSpec") -> ExternalCommand:
        """Build and execute the command for *spec*.

        Returns:
            The command that was executed.

        Raises:
            stringtie_gf.errors.ExternalCommandFailure: If a stage of the
                command exits non-zero.
        """
        command = self.build_command(spec)
        run_shell(command.render())
        return command
