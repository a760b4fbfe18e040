"""Tool wrapper for StringTie transcript assembly.

The native command line is described by :data:`STRINGTIE_TEMPLATE`, an
ordered table mapping each logical parameter to StringTie's flag syntax.
Every file-valued entry gets its own ``/data{N}`` mount, where ``N`` is the
entry's 1-based position in the table, so two entries never share a
container path even when they share a host directory.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Sequence

import structlog

from stringtie_gf.models import MountSpec, OutputLayout, ResolvedPath

from .base import Tool, ToolSpec

log = structlog.get_logger()

DEFAULT_IMAGE = "quay.io/biocontainers/stringtie:2.1.6--h978d192_0"


@dataclass(frozen=True)
class TemplateParam:
    """One entry of a native argument template.

    Attributes:
        name: Logical parameter name.
        flag: Native flag emitted before the value; ``None`` for positionals.
        source: Input the value is taken from (``"gtf"``, ``"bam"``,
            ``"output"``); ``None`` for bare switches.
        subpath: Path below the mounted directory. ``{base}`` expands to the
            source's base name; the base name itself is used when omitted.
    """

    name: str
    flag: str | None
    source: str | None = None
    subpath: str | None = None


STRINGTIE_TEMPLATE: tuple[TemplateParam, ...] = (
    TemplateParam("annotation", "-G", source="gtf"),
    TemplateParam("strand_rf", "--rf"),
    TemplateParam("estimate_only", "-e"),
    TemplateParam("ballgown", "-B"),
    TemplateParam("transcripts", "-o", source="output", subpath="{base}/{base}_final_transcript.gtf"),
    TemplateParam("gene_abundance", "-A", source="output", subpath="{base}/{base}.tsv"),
    TemplateParam("coverage_reference", "-C", source="output", subpath="{base}/{base}_final_reference.gtf"),
    TemplateParam("alignments", None, source="bam"),
)


def translate(
    template: Sequence[TemplateParam],
    sources: Mapping[str, ResolvedPath],
) -> tuple[list[str], list[MountSpec]]:
    """Translate *template* into native arguments and their mounts.

    Args:
        template: Ordered parameter table.
        sources: Resolved path for every ``source`` named in *template*.

    Returns:
        ``(args, mounts)`` in template order.
    """
    args: list[str] = []
    mounts: list[MountSpec] = []
    for slot, param in enumerate(template, start=1):
        if param.flag:
            args.append(param.flag)
        if param.source is None:
            continue
        path = sources[param.source]
        mount_point = f"/data{slot}"
        mounts.append(MountSpec(host_directory=path.directory, container_path=mount_point))
        name = param.subpath.format(base=path.base) if param.subpath else path.base
        args.append(f"{mount_point}/{name}")
    return args, mounts


def split_executable(executable: str) -> tuple[str, list[str], list[MountSpec]]:
    """Split the executable string into program, extra args and their mounts.

    Extra tokens prefixed with ``^`` are host paths: each one is mounted at
    ``/data{i}_r`` (``i`` = token index) and replaced by its container path.
    """
    tokens = shlex.split(executable)
    if not tokens:
        raise ValueError("executable must not be empty")
    program, extra = tokens[0], tokens[1:]
    args: list[str] = []
    mounts: list[MountSpec] = []
    for idx, tok in enumerate(extra, start=1):
        if tok.startswith("^"):
            host = ResolvedPath.from_raw(tok[1:])
            mount_point = f"/data{idx}_r"
            mounts.append(MountSpec(host_directory=host.directory, container_path=mount_point))
            args.append(f"{mount_point}/{host.base}")
        else:
            args.append(tok)
    return program, args, mounts


@dataclass
class StringtieConfig:
    """Resolved inputs and container settings for one StringTie run."""

    bam: ResolvedPath
    gtf: ResolvedPath
    layout: OutputLayout
    image: str = DEFAULT_IMAGE
    executable: str = "stringtie"


class StringtieTool(Tool):
    """Build a container spec to run StringTie."""

    tool_name = "stringtie"

    def __init__(self, cfg: StringtieConfig, template: Sequence[TemplateParam] = STRINGTIE_TEMPLATE):
        """Store the configuration and the argument template."""
        self.cfg = cfg
        self.template = tuple(template)

    def log_paths(self) -> tuple[Path, Path]:
        """Return the stdout and stderr log files of the run."""
        stem = f"{self.cfg.layout.output.base}-{self.tool_name}"
        log_dir = self.cfg.layout.log_dir
        return log_dir / f"{stem}.stdout", log_dir / f"{stem}.stderr"

    def build_spec(self) -> ToolSpec:  # type: ignore[override]
        """Return the container spec for StringTie."""
        program, run_args, mounts = split_executable(self.cfg.executable)
        args, template_mounts = translate(
            self.template,
            {"gtf": self.cfg.gtf, "bam": self.cfg.bam, "output": self.cfg.layout.output},
        )
        stdout_log, stderr_log = self.log_paths()
        log.debug("stringtie.spec", mounts=len(mounts) + len(template_mounts))
        return ToolSpec(
            image=self.cfg.image,
            args=[program, *run_args, *args],
            mounts=[*mounts, *template_mounts],
            stdout_log=stdout_log,
            stderr_log=stderr_log,
        )


__all__ = [
    "TemplateParam",
    "STRINGTIE_TEMPLATE",
    "translate",
    "split_executable",
    "StringtieConfig",
    "StringtieTool",
]
