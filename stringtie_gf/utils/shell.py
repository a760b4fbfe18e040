"""Run shell command lines and report the status of every pipeline stage.

Commands run through ``bash`` so that ``exec_init`` strings and the rendered
container command (with its log redirections) behave exactly as typed. The
statuses of all stages of the last pipeline are read back from
``PIPESTATUS``; the first non-zero one fails the run.
"""

from __future__ import annotations

import os
import shlex
import subprocess
import tempfile
from pathlib import Path
from typing import Sequence

import structlog

from stringtie_gf.errors import ExternalCommandFailure
from stringtie_gf.utils.display import echo_command

log = structlog.get_logger()

SHELL = "bash"


def _wrap(cmd: str, status_file: Path) -> str:
    """Append a trailer that records ``PIPESTATUS`` into *status_file*."""
    return (
        f"{cmd}\n"
        f'__st=("${{PIPESTATUS[@]}}"); echo "${{__st[@]}}" > {shlex.quote(str(status_file))}\n'
        'for __s in "${__st[@]}"; do [ "$__s" -ne 0 ] && exit "$__s"; done; exit 0\n'
    )


def _parse_statuses(text: str) -> list[int]:
    """Return the integers recorded by the status trailer."""
    return [int(tok) for tok in text.split()]


def first_failure(statuses: Sequence[int]) -> tuple[int, int] | None:
    """Return ``(stage, status)`` of the first non-zero status, if any."""
    for stage, status in enumerate(statuses):
        if status != 0:
            return stage, status
    return None


def run_shell(cmd: str, *, echo: bool = True) -> list[int]:
    """Execute *cmd* through bash and check every pipeline stage.

    Args:
        cmd: Command line, possibly containing pipes and redirections.
        echo: Print ``CMD=<cmd>`` before running.

    Returns:
        Exit statuses of the stages of the last pipeline (all zero).

    Raises:
        ExternalCommandFailure: If any stage exits non-zero. When the command
            terminates the shell itself (e.g. ``exit 4``) the shell's own
            status is reported as stage ``0``.
    """
    if echo:
        echo_command(cmd)
    log.info("shell.run", cmd=cmd)

    fd, tmp = tempfile.mkstemp(prefix="stringtie-gf-", suffix=".status")
    os.close(fd)
    status_file = Path(tmp)
    try:
        proc = subprocess.run([SHELL, "-c", _wrap(cmd, status_file)])
        recorded = status_file.read_text()
    finally:
        status_file.unlink(missing_ok=True)

    statuses = _parse_statuses(recorded) if recorded.strip() else [proc.returncode]
    failure = first_failure(statuses)
    if failure is None and proc.returncode != 0:
        failure = (0, proc.returncode)
    if failure is not None:
        stage, status = failure
        log.error("shell.failed", cmd=cmd, stage=stage, status=status)
        raise ExternalCommandFailure(stage, status, cmd)
    return statuses


__all__ = ["run_shell", "first_failure", "SHELL"]
