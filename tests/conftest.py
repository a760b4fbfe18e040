"""Pytest configuration for stringtie_gf tests."""

import pytest

from stringtie_gf.config.invocation import OPTION_NAMES

_AMBIENT = (*OPTION_NAMES, "AGAVE_JOB_ID", "STRINGTIE_GF_CONFIG", "STRINGTIE_GF_LOG_DIR")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Drop job-system variables that would override CLI flags."""
    for name in _AMBIENT:
        monkeypatch.delenv(name, raising=False)
