"""
Package-level logging configuration.

* Rich console output (colourised, nicely formatted).
* Rotating **JSON** log file inside ``$STRINGTIE_GF_LOG_DIR`` when that
  variable (or an explicit ``log_dir``) is set.

:func:`setup_logging` wires everything and is called once by the CLI before
any output is produced.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional

import structlog
from rich.logging import RichHandler
from structlog.dev import ConsoleRenderer as StructlogConsoleRenderer
from structlog.stdlib import LoggerFactory

__all__ = ["setup_logging", "LOG_DIR_ENV"]

LOG_DIR_ENV = "STRINGTIE_GF_LOG_DIR"


def _json_file_handler(log_dir: Optional[Path], level: int) -> logging.Handler | None:
    """Return a rotating JSON file handler or *None* when no directory is known.

    Args:
        log_dir: Explicit directory; ``$STRINGTIE_GF_LOG_DIR`` is used when
            this is ``None``.
        level: Log-level for the handler.
    """
    env_dir = os.environ.get(LOG_DIR_ENV)
    if log_dir is None and env_dir:
        log_dir = Path(env_dir).expanduser()
    if log_dir is None:
        return None
    log_dir.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        filename=log_dir / "stringtie-gf.log",
        maxBytes=5_000_000,  # ~5 MB before rollover
        backupCount=3,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def setup_logging(
    *,
    verbose: bool = False,
    debug: bool = False,
    log_dir: Optional[Path] = None,
) -> None:
    """Configure rich console logging and the optional JSON file log.

    Args:
        verbose: Emit INFO-level messages to the console.
        debug: Emit DEBUG-level messages plus rich tracebacks.
        log_dir: Directory for the rotating JSON log; falls back to
            ``$STRINGTIE_GF_LOG_DIR``.
    """
    # Console stays silent without -v/--debug; the CLI echoes failures itself.
    console_lvl = (
        logging.DEBUG if debug else logging.INFO if verbose else logging.CRITICAL + 1
    )
    file_lvl = logging.DEBUG if debug else logging.INFO

    handlers: list[logging.Handler] = [
        RichHandler(
            level=console_lvl,
            rich_tracebacks=debug,
            tracebacks_show_locals=False,
            markup=False,
            show_path=debug,
        )
    ]
    json_handler = _json_file_handler(log_dir, file_lvl)
    if json_handler is not None:
        handlers.append(json_handler)

    # force=True lets repeated CLI invocations in one interpreter (tests)
    # replace the handlers installed by the previous run.
    logging.basicConfig(
        level=logging.DEBUG,
        handlers=handlers,
        format="%(message)s",
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            (
                StructlogConsoleRenderer()
                if verbose or debug
                else structlog.processors.JSONRenderer()
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            min(console_lvl, file_lvl, logging.CRITICAL)
            if json_handler is not None
            else min(console_lvl, logging.CRITICAL)
        ),
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=False,
    )
