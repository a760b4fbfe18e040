"""Resolve run options from the environment, the command line and defaults.

A managed job system injects parameters as lower-case environment variables
named after the options (``bam``, ``gtf`` …). Those values take precedence
over the command line, which in turn takes precedence over the defaults.
Empty environment values count as unset.
"""

from __future__ import annotations

import os
from typing import Mapping, Optional

import structlog

from stringtie_gf.models import InvocationConfig

log = structlog.get_logger()

OPTION_NAMES: tuple[str, ...] = ("bam", "gtf", "output", "exec_method", "exec_init")
DEFAULTS: dict[str, str] = {"exec_method": "auto", "exec_init": ":"}


def resolve_invocation(
    cli_values: Mapping[str, Optional[str]],
    environ: Mapping[str, str] | None = None,
) -> InvocationConfig:
    """Apply ``environment > flag > default`` to every option.

    Args:
        cli_values: Values parsed from the command line; ``None`` means the
            flag was not given.
        environ: Environment mapping, :data:`os.environ` when omitted.

    Returns:
        The immutable :class:`InvocationConfig` of the run.
    """
    environ = os.environ if environ is None else environ
    resolved: dict[str, str] = {}
    for name in OPTION_NAMES:
        env_value = environ.get(name)
        cli_value = cli_values.get(name)
        if env_value:
            if cli_value is not None and cli_value != env_value:
                log.debug("invocation.env_override", option=name)
            resolved[name] = env_value
        elif cli_value is not None:
            resolved[name] = cli_value
        else:
            resolved[name] = DEFAULTS.get(name, "")
    return InvocationConfig(**resolved)


def job_id(environ: Mapping[str, str] | None = None) -> str | None:
    """Return the Agave job identifier when running under the job system."""
    environ = os.environ if environ is None else environ
    return environ.get("AGAVE_JOB_ID") or None


__all__ = ["resolve_invocation", "job_id", "OPTION_NAMES", "DEFAULTS"]
