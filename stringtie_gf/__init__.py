"""
stringtie_gf package initialisation.

* ``stringtie_gf.__version__`` is resolved from the installed distribution
  metadata.
* :func:`stringtie_gf.config.load_config` and
  :func:`stringtie_gf.pipeline.run_stringtie` are re-exported for
  programmatic use.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__: str = version("stringtie-gf")
except PackageNotFoundError:
    # Source tree without an installed wheel.
    __version__ = "0.0.0"

from .config import load_config  # noqa: E402
from .pipeline import run_stringtie  # noqa: E402

__all__: list[str] = ["load_config", "run_stringtie", "__version__"]
