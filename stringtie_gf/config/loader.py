"""
YAML configuration loader.

Search precedence (first match wins)
1. An explicit path argument (``--config`` on the CLI).
2. The file named by ``$STRINGTIE_GF_CONFIG``.
3. The packaged default shipped inside the wheel.
"""

from __future__ import annotations

import os
from importlib.resources import as_file, files
from pathlib import Path
from typing import Mapping, Optional

import structlog
import yaml

from .schema import AppSettings

log = structlog.get_logger()

_DEFAULT_CONFIG = files("stringtie_gf.config") / "stringtie.yaml"
ENV_CONFIG = "STRINGTIE_GF_CONFIG"


def _first_existing(*candidates: Optional[Path]) -> Optional[Path]:
    """Return the first path in *candidates* that exists on disk."""
    for p in candidates:
        if p is not None and p.exists():
            return p
    return None


def _load_yaml(path: Path) -> dict:
    """Read a YAML file, returning an empty dict for an empty document."""
    return yaml.safe_load(path.read_text()) or {}


def resolve_config_path(
    explicit: Optional[Path] = None,
    environ: Mapping[str, str] | None = None,
) -> Path:
    """Return the YAML file that should be loaded.

    Args:
        explicit: Path supplied by the caller. Must exist when given.
        environ: Environment mapping consulted for ``$STRINGTIE_GF_CONFIG``.
            Defaults to :data:`os.environ`.

    Returns:
        Path of the configuration document.

    Raises:
        FileNotFoundError: If *explicit* is given but missing.
    """
    environ = os.environ if environ is None else environ
    if explicit is not None:
        explicit = Path(explicit).expanduser()
        if not explicit.exists():
            raise FileNotFoundError(f"Configuration file not found: {explicit}")
        return explicit

    env_value = environ.get(ENV_CONFIG)
    env_path = Path(env_value).expanduser() if env_value else None
    resolved = _first_existing(env_path)
    if resolved is None:
        if env_path is not None:
            log.warning("config.env_missing", path=str(env_path))
        with as_file(_DEFAULT_CONFIG) as p:
            resolved = p
    return resolved


def load_config(
    path: Optional[str | Path] = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> AppSettings:
    """Return a validated :class:`AppSettings`.

    Args:
        path: Explicit YAML path; ``None`` triggers the documented search.
        environ: Environment mapping used for the search.

    Raises:
        RuntimeError: When the YAML cannot be parsed or fails Pydantic
            validation.
    """
    cfg_path = resolve_config_path(Path(path) if path else None, environ)
    try:
        data = _load_yaml(cfg_path)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"Invalid configuration – {cfg_path}: {exc}") from exc
    log.debug("config.loaded", path=str(cfg_path))
    try:
        return AppSettings(**data)
    except Exception as exc:  # pydantic.ValidationError or malformed YAML types
        raise RuntimeError(f"Invalid configuration – {exc}") from exc


__all__ = ["load_config", "resolve_config_path", "ENV_CONFIG"]
