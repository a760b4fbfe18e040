"""Exception hierarchy shared by the staging, selection and execution layers.

Library code raises these exceptions; only :mod:`stringtie_gf.cli` turns them
into console messages and process exit codes.
"""

from __future__ import annotations


class StringtieAppError(RuntimeError):
    """Base class for every fatal condition of a wrapper run.

    Attributes:
        exit_code: Process status the CLI exits with.
        show_usage: Whether the CLI prints usage text after the message.
    """

    exit_code: int = 1
    show_usage: bool = True


class UsageError(StringtieAppError):
    """Raised when a required option is missing or malformed."""


class StagingTimeout(StringtieAppError):
    """Raised when an input file never appears within the retry window."""

    show_usage = False

    def __init__(self, label: str, path: str, attempts: int) -> None:
        """Record which input was missing and how often it was polled."""
        super().__init__(f"{label} not found: {path}")
        self.label = label
        self.path = path
        self.attempts = attempts


class PathResolutionError(StringtieAppError):
    """Raised when a path needed by the run was never supplied."""


class UnsupportedMethod(StringtieAppError):
    """Raised when ``exec_method`` is outside the supported set."""

    def __init__(self, method: str) -> None:
        """Store the rejected method name."""
        super().__init__(f"Invalid execution method: {method}")
        self.method = method


class MethodNotDetected(StringtieAppError):
    """Raised when ``auto`` finds no usable backend."""

    def __init__(self) -> None:
        """Use the fixed detection failure message."""
        super().__init__("Valid execution method not detected")


class DirectoryPreparationError(StringtieAppError):
    """Raised when the output, log or scratch directory cannot be created."""

    show_usage = False

    def __init__(self, path: str, reason: str) -> None:
        """Record the directory that could not be created."""
        super().__init__(f"Cannot create directory {path}: {reason}")
        self.path = path


class ExternalCommandFailure(StringtieAppError):
    """Raised when a stage of an external shell pipeline exits non-zero.

    The exit code is the failing stage's status, propagated verbatim.
    """

    show_usage = False

    def __init__(self, stage: int, status: int, command: str) -> None:
        """Record the failing stage index, its status and the command."""
        super().__init__(f"Error when executing command #{stage}: '{command}'")
        self.stage = stage
        self.status = status
        self.command = command
        self.exit_code = status


__all__ = [
    "StringtieAppError",
    "UsageError",
    "StagingTimeout",
    "PathResolutionError",
    "UnsupportedMethod",
    "MethodNotDetected",
    "DirectoryPreparationError",
    "ExternalCommandFailure",
]
