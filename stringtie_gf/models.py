"""
Typed, immutable value objects that circulate between the run stages.

Every class inherits from :class:`pydantic.BaseModel` with ``frozen=True`` so
an object cannot change once a stage has produced it:

* :class:`InvocationConfig` – the resolved options of one run.
* :class:`ResolvedPath` – a canonical path split into directory and name.
* :class:`OutputLayout` – the output path plus its ``_log``/``_tmp`` siblings.
* :class:`MountSpec` – one host-directory → container-path binding.
* :class:`ExternalCommand` – the fully assembled container invocation.
"""

from __future__ import annotations

import shlex
from pathlib import Path

from pydantic import BaseModel, model_validator


class InvocationConfig(BaseModel, frozen=True):
    """Options of a single wrapper run after precedence has been applied.

    Attributes
    ----------
    bam
        Raw path of the input BAM file (may be empty when never supplied).
    gtf
        Raw path of the input GTF annotation.
    output
        Raw output directory path.
    exec_method
        Requested execution method, validated later against the allow-list.
    exec_init
        Shell command run before method detection.
    """

    bam: str = ""
    gtf: str = ""
    output: str = ""
    exec_method: str = "auto"
    exec_init: str = ":"


class ResolvedPath(BaseModel, frozen=True):
    """Absolute, symlink-resolved path with its directory and base name."""

    full: Path
    directory: Path
    base: str

    @model_validator(mode="after")
    def _parts_rejoin(self):
        """Ensure ``directory / base`` reproduces ``full``."""
        if self.directory / self.base != self.full:
            raise ValueError(f"{self.full} does not split into {self.directory} + {self.base}")
        return self

    @classmethod
    def from_raw(cls, raw: str | Path) -> "ResolvedPath":
        """Resolve *raw* like ``readlink -f`` and split the result."""
        full = Path(raw).resolve()
        return cls(full=full, directory=full.parent, base=full.name)


class OutputLayout(BaseModel, frozen=True):
    """Output path plus the log and scratch directories next to it.

    Attributes
    ----------
    output
        Resolved output directory; artifacts land in ``output.full``.
    log_dir
        ``<output parent>/_log`` – receives the tool's stdout/stderr.
    tmp_dir
        ``<output parent>/_tmp`` – reserved scratch space.
    """

    output: ResolvedPath
    log_dir: Path
    tmp_dir: Path


class MountSpec(BaseModel, frozen=True):
    """A single ``-v host:container`` binding."""

    host_directory: Path
    container_path: str

    def as_volume(self) -> str:
        """Return the ``host:container`` string for ``docker run -v``."""
        return f"{self.host_directory}:{self.container_path}"


class ExternalCommand(BaseModel, frozen=True):
    """Fully assembled invocation, rendered once and executed once.

    ``arguments`` holds every token after ``executable``, mounts included;
    ``mounts`` repeats the bindings in structured form for inspection.
    """

    executable: str
    arguments: tuple[str, ...]
    mounts: tuple[MountSpec, ...] = ()
    stdout_log: Path | None = None
    stderr_log: Path | None = None

    def argv(self) -> list[str]:
        """Return the command vector without redirections."""
        return [self.executable, *self.arguments]

    def render(self) -> str:
        """Return the shell command line, including log redirections."""
        line = shlex.join(self.argv())
        if self.stdout_log is not None:
            line += f" >{shlex.quote(str(self.stdout_log))}"
        if self.stderr_log is not None:
            line += f" 2>{shlex.quote(str(self.stderr_log))}"
        return line


__all__ = [
    "InvocationConfig",
    "ResolvedPath",
    "OutputLayout",
    "MountSpec",
    "ExternalCommand",
]
