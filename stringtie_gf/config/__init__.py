"""
Configuration package façade.

* :func:`load_config` – locate, parse and validate ``stringtie.yaml``.
* :class:`AppSettings` – the validated configuration model.
* :func:`resolve_invocation` – apply option precedence for one run.
"""

from .invocation import resolve_invocation  # noqa: F401
from .loader import load_config  # noqa: F401
from .schema import AppSettings  # noqa: F401

__all__: list[str] = ["load_config", "AppSettings", "resolve_invocation"]
