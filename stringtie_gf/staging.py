"""Wait for asynchronously staged inputs to appear on local storage.

Job systems copy inputs next to the job shortly before (and sometimes after)
the wrapper starts. :class:`RetryPolicy` polls for a file at a fixed
interval for a bounded number of attempts; there is no backoff and no
jitter. The sleep function is injectable so callers and tests can run the
policy without real waits.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

import click
import structlog

from stringtie_gf.errors import StagingTimeout, UsageError

log = structlog.get_logger()


@dataclass(frozen=True)
class RetryPolicy:
    """Fixed-interval, bounded polling.

    Attributes:
        max_attempts: Number of failed checks tolerated before giving up.
        interval: Seconds slept after each failed check.
        sleep: Function used to wait; :func:`time.sleep` by default.
    """

    max_attempts: int = 10
    interval: float = 1.0
    sleep: Callable[[float], None] = field(default=time.sleep, compare=False)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.interval < 0:
            raise ValueError("interval must not be negative")

    def wait_until(
        self,
        predicate: Callable[[], bool],
        on_wait: Callable[[int], None] | None = None,
    ) -> bool:
        """Poll *predicate* until it holds or the attempts run out.

        Args:
            predicate: Condition to check; evaluated before every sleep.
            on_wait: Optional callback receiving the 1-based attempt number
                each time the policy is about to sleep.

        Returns:
            The final value of *predicate*.
        """
        attempts = 0
        while not predicate():
            attempts += 1
            if on_wait is not None:
                on_wait(attempts)
            self.sleep(self.interval)
            if attempts >= self.max_attempts:
                break
        return predicate()


def stage_input(path: str, label: str, policy: RetryPolicy) -> Path:
    """Return *path* once it exists as a regular file.

    Args:
        path: Raw input path from the invocation.
        label: Human readable input name, e.g. ``"Input BAM File"``.
        policy: Polling window.

    Returns:
        The staged path (not yet normalised).

    Raises:
        UsageError: If *path* is empty.
        StagingTimeout: If the file is still absent after the last attempt.
    """
    if not path:
        raise UsageError(f"{label} required")

    target = Path(path)

    def _announce(attempt: int) -> None:
        click.echo(f"{path} not staged, waiting...")
        log.info("staging.waiting", path=path, attempt=attempt)

    if not policy.wait_until(target.is_file, on_wait=_announce):
        log.error("staging.timeout", path=path, attempts=policy.max_attempts)
        raise StagingTimeout(label, path, policy.max_attempts)
    log.debug("staging.ready", path=path)
    return target


__all__ = ["RetryPolicy", "stage_input"]
