"""
End-to-end StringTie run.

:func:`run_stringtie` walks the fixed sequence of stages once, with no
backward transitions::

    STAGE_INPUTS → NORMALIZE_PATHS → VALIDATE_METHOD → RUN_INIT
      → RESOLVE_AUTO → PREPARE_DIRS → EXECUTE

Each stage raises a :class:`~stringtie_gf.errors.StringtieAppError` subclass
on failure; the CLI turns those into messages and exit codes.
"""

from __future__ import annotations

import time
from typing import Callable, Mapping, Optional

import click
import structlog

from stringtie_gf.config.invocation import job_id
from stringtie_gf.config.schema import AppSettings
from stringtie_gf.engines import AUTO, Which, get_engine, resolve_method, validate_method
from stringtie_gf.errors import DirectoryPreparationError
from stringtie_gf.models import ExternalCommand, InvocationConfig, OutputLayout
from stringtie_gf.staging import RetryPolicy, stage_input
from stringtie_gf.tools.stringtie import StringtieConfig, StringtieTool
from stringtie_gf.utils.display import echo_banner, echo_command, echo_values
from stringtie_gf.utils.paths import normalise, output_layout
from stringtie_gf.utils.shell import run_shell

log = structlog.get_logger()


def describe(invocation: InvocationConfig) -> list[tuple[str, str]]:
    """Return the ``(label, value)`` pairs echoed at the start of a run."""
    return [
        ("Bam", invocation.bam),
        ("Gtf", invocation.gtf),
        ("Output", invocation.output),
        ("Execution Method", invocation.exec_method),
        ("Execution Initialization", invocation.exec_init),
    ]


def prepare_dirs(layout: OutputLayout) -> None:
    """Create the output, log and scratch directories (idempotent).

    Raises:
        DirectoryPreparationError: When a directory cannot be created.
    """
    for p in (layout.output.full, layout.log_dir, layout.tmp_dir):
        try:
            p.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DirectoryPreparationError(str(p), exc.strerror or str(exc)) from exc
        log.debug("dirs.ready", path=str(p))


def run_stringtie(
    invocation: InvocationConfig,
    settings: Optional[AppSettings] = None,
    *,
    dry_run: bool = False,
    which: Which | None = None,
    sleep: Callable[[float], None] | None = None,
    environ: Mapping[str, str] | None = None,
) -> ExternalCommand:
    """Stage inputs, select a backend and run StringTie once.

    Args:
        invocation: Resolved options of the run.
        settings: Validated configuration; packaged defaults when omitted.
        dry_run: Validate and compose, but skip ``exec_init``, directory
            creation and the container itself.
        which: Executable lookup used by ``auto`` detection.
        sleep: Sleep function used while polling for inputs.
        environ: Environment consulted for job-system detection.

    Returns:
        The composed (and, unless *dry_run*, executed) command.

    Raises:
        stringtie_gf.errors.StringtieAppError: On any failed stage.
    """
    settings = settings or AppSettings()

    agave_id = job_id(environ)
    if agave_id:
        click.echo("Agave job detected")
        log.info("job.detected", job_id=agave_id)

    echo_values(describe(invocation))

    # STAGE_INPUTS / NORMALIZE_PATHS
    policy = RetryPolicy(
        max_attempts=settings.staging.max_attempts,
        interval=settings.staging.interval,
        sleep=sleep or time.sleep,
    )
    bam = normalise(stage_input(invocation.bam, "Input BAM File", policy))
    gtf = normalise(stage_input(invocation.gtf, "Input GTF File", policy))
    layout = output_layout(
        invocation.output,
        log_name=settings.layout.log_dir,
        tmp_name=settings.layout.tmp_dir,
    )

    # VALIDATE_METHOD
    requested = validate_method(invocation.exec_method)

    # RUN_INIT
    if dry_run:
        echo_command(invocation.exec_init)
    else:
        run_shell(invocation.exec_init)

    # RESOLVE_AUTO
    method = resolve_method(requested, which)
    if requested == AUTO:
        click.echo(f"Detected Execution Method: {method}")
    log.info("method.resolved", requested=requested, method=method)

    # PREPARE_DIRS
    if not dry_run:
        prepare_dirs(layout)

    # EXECUTE
    tool = StringtieTool(
        StringtieConfig(
            bam=bam,
            gtf=gtf,
            layout=layout,
            image=settings.image,
            executable=settings.executable,
        )
    )
    engine = get_engine(method)
    echo_banner(f"Run {tool.tool_name} ({method})")
    if dry_run:
        command = tool.command(engine)
        echo_command(command.render())
        return command
    return tool.execute(engine)


__all__ = ["run_stringtie", "prepare_dirs", "describe"]
