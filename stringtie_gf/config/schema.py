"""
Pydantic models mirroring ``stringtie.yaml``.

The rest of the package receives a validated :class:`AppSettings` instance
and never touches raw YAML dictionaries.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class StagingSettings(BaseModel):
    """Polling window used while waiting for inputs to be staged."""

    max_attempts: int = Field(10, ge=1, description="Polls before giving up")
    interval: float = Field(1.0, ge=0, description="Seconds between polls")


class LayoutSettings(BaseModel):
    """Names of the directories created next to the output directory."""

    log_dir: str = "_log"
    tmp_dir: str = "_tmp"

    @field_validator("log_dir", "tmp_dir")
    @classmethod
    def _plain_name(cls, v: str) -> str:
        """Reject empty names and names containing a path separator."""
        if not v or "/" in v:
            raise ValueError(f"expected a plain directory name, got {v!r}")
        return v


class AppSettings(BaseModel):
    """Root configuration object."""

    image: str = "quay.io/biocontainers/stringtie:2.1.6--h978d192_0"
    executable: str = "stringtie"
    staging: StagingSettings = Field(default_factory=StagingSettings)
    layout: LayoutSettings = Field(default_factory=LayoutSettings)

    @field_validator("image")
    @classmethod
    def _pinned(cls, v: str) -> str:
        """Require a fully pinned image reference."""
        name, sep, tag = v.rpartition(":")
        if "@sha256:" in v:
            return v
        if not sep or "/" in tag or not name:
            raise ValueError(f"image must carry an explicit tag: {v}")
        if tag == "latest":
            raise ValueError(f"image tag 'latest' is not allowed: {v}")
        return v


__all__ = ["AppSettings", "StagingSettings", "LayoutSettings"]
