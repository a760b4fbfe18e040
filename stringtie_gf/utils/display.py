"""Utility functions to print formatted CLI messages for progress updates."""

from __future__ import annotations

from typing import Iterable

import click

__all__ = ["echo_banner", "echo_values", "echo_command", "echo_success", "echo_failure"]


def echo_banner(text: str) -> None:
    """Print a colourful banner announcing a processing step.

    Args:
        text: Banner text.
    """
    click.secho(f"\n=== {text} ===", fg="cyan")


def echo_values(pairs: Iterable[tuple[str, str]]) -> None:
    """Echo ``label: value`` lines, one per resolved input."""
    for label, value in pairs:
        click.echo(f"{label}: {value}")


def echo_command(cmd: str) -> None:
    """Echo a command line exactly as it is about to run."""
    click.echo(f"CMD={cmd}")


def echo_success(text: str) -> None:
    """Echo a green success message prefixed with a tick.

    Args:
        text: Message to display.
    """
    click.secho(f"✓ {text}", fg="green")


def echo_failure(text: str) -> None:
    """Echo a red error message on stderr."""
    click.secho(text, fg="red", err=True)
