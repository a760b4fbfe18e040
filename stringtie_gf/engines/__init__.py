"""Execution engines and the execution-method selector.

``ENGINES`` is the ranked registry used by ``auto`` detection: the first
available engine wins. ``SUPPORTED_METHODS`` is the static allow-list for
``--exec_method``.
"""

from __future__ import annotations

import shutil

import structlog

from stringtie_gf.errors import MethodNotDetected, UnsupportedMethod

from .base import ExecutionEngine, Which
from .docker import DockerEngine

log = structlog.get_logger()

ENGINES: dict[str, type[ExecutionEngine]] = {
    DockerEngine.name: DockerEngine,
}
AUTO = "auto"
SUPPORTED_METHODS: tuple[str, ...] = (*ENGINES, AUTO)


def detect_methods(which: Which | None = None) -> list[str]:
    """Return the names of available engines, best first."""
    which = which or shutil.which
    found = [name for name, engine in ENGINES.items() if engine.available(which)]
    log.debug("engines.detected", methods=found)
    return found


def validate_method(requested: str) -> str:
    """Return *requested* if it is in :data:`SUPPORTED_METHODS`.

    Raises:
        UnsupportedMethod: For anything outside the allow-list.
    """
    if requested not in SUPPORTED_METHODS:
        raise UnsupportedMethod(requested)
    return requested


def resolve_method(requested: str, which: Which | None = None) -> str:
    """Turn a validated method into the name of a concrete engine.

    ``auto`` takes the first detected engine; a concrete method is returned
    unchanged without probing.

    Raises:
        MethodNotDetected: If ``auto`` finds nothing.
    """
    if requested != AUTO:
        return requested
    found = detect_methods(which)
    if not found:
        raise MethodNotDetected()
    return found[0]


def get_engine(method: str) -> ExecutionEngine:
    """Instantiate the engine registered under *method*."""
    try:
        return ENGINES[method]()
    except KeyError:
        raise UnsupportedMethod(method) from None


__all__ = [
    "ExecutionEngine",
    "DockerEngine",
    "ENGINES",
    "SUPPORTED_METHODS",
    "detect_methods",
    "validate_method",
    "resolve_method",
    "get_engine",
]
