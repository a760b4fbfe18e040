"""Expose the ``stringtie-gf-cli`` command.

The module:

* declares a single Click *command* called :pyfunc:`main`;
* resolves run options with ``environment > flag > default`` precedence;
* sets up logging via :pyfunc:`stringtie_gf.utils.logging.setup_logging`;
* loads the YAML configuration;
* converts :class:`~stringtie_gf.errors.StringtieAppError` failures into a
  message, usage text and the matching exit code.

Exit codes: ``0`` success, ``1`` validation/staging/usage failures, ``2``
option parsing failures, ``3`` unrecognised options, anything else is the
status of the failing external command stage. ``Exit code: <n>`` is printed
on every path out of the command.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import click
import structlog

from stringtie_gf import __version__
from stringtie_gf.config import load_config, resolve_invocation
from stringtie_gf.errors import StringtieAppError
from stringtie_gf.pipeline import run_stringtie
from stringtie_gf.utils.display import echo_failure, echo_success
from stringtie_gf.utils.logging import setup_logging

log = structlog.get_logger()

UNKNOWN_OPTION_EXIT = 3


class StringtieCommand(click.Command):
    """Click command that reports its exit status like a job-system app."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        """Give unrecognised options their own exit code."""
        try:
            return super().parse_args(ctx, args)
        except click.NoSuchOption as exc:
            exc.exit_code = UNKNOWN_OPTION_EXIT
            raise

    def main(self, *args: Any, **kwargs: Any) -> Any:
        """Run the command and always print the final exit code."""
        try:
            return super().main(*args, **kwargs)
        except SystemExit as exc:
            code = exc.code if isinstance(exc.code, int) else (0 if exc.code is None else 1)
            click.echo(f"Exit code: {code}")
            raise
        except Exception:
            log.exception("run.crashed")
            click.echo("Exit code: 1")
            raise


_CTX: Dict[str, Any] = dict(
    help_option_names=["-h", "--help"],
    max_content_width=120,
)


@click.command(
    cls=StringtieCommand,
    context_settings=_CTX,
    help="""\b
stringtie-gf-cli – run StringTie on a BAM file inside a container.

Values injected as environment variables named after the options
(bam, gtf, output, exec_method, exec_init) override the flags.
""",
)
@click.version_option(__version__)
@click.option("--bam", default=None, metavar="PATH", help="Input BAM File")
@click.option("--gtf", default=None, metavar="PATH", help="Input GTF File")
@click.option("--output", default=None, metavar="PATH", help="Output Directory")
@click.option(
    "--exec_method",
    "exec_method",
    default=None,
    metavar="[docker|auto]",
    help="Execution method (docker, auto)  [default: auto]",
)
@click.option(
    "--exec_init",
    "exec_init",
    default=None,
    metavar="CMD",
    help="Execution initialization command(s)  [default: :]",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML file overriding the packaged defaults (image, staging window).",
)
@click.option("--dry-run", is_flag=True, help="Print the commands without running them.")
@click.option("-v", "--verbose", is_flag=True, help="INFO-level console output.")
@click.option("--debug", is_flag=True, help="DEBUG-level console output.")
@click.pass_context
def main(  # noqa: D401 – Click callback
    ctx: click.Context,
    bam: str | None,
    gtf: str | None,
    output: str | None,
    exec_method: str | None,
    exec_init: str | None,
    config_path: Path | None,
    dry_run: bool,
    verbose: bool,
    debug: bool,
) -> None:
    """Root command executed by *stringtie-gf-cli*.

    Raises:
        click.ClickException: When the configuration cannot be loaded.
    """
    setup_logging(verbose=verbose, debug=debug)

    invocation = resolve_invocation(
        {
            "bam": bam,
            "gtf": gtf,
            "output": output,
            "exec_method": exec_method,
            "exec_init": exec_init,
        }
    )

    try:
        settings = load_config(config_path)
    except (RuntimeError, FileNotFoundError) as exc:
        raise click.ClickException(str(exc)) from exc

    try:
        command = run_stringtie(invocation, settings, dry_run=dry_run)
    except StringtieAppError as exc:
        log.error("run.failed", error=str(exc), exit_code=exc.exit_code)
        echo_failure(str(exc))
        if exc.show_usage:
            click.echo()
            click.echo(ctx.get_help())
        ctx.exit(exc.exit_code)

    if not dry_run:
        echo_success(f"StringTie finished; logs in {command.stdout_log.parent}")


__all__: list[str] = ["main"]
