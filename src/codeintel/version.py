"""Version lookup for codeintel.

The packaged ``VERSION`` file is the source of truth; installed distribution
metadata is consulted only when the file is missing (zipped or stripped
installs).
"""

from __future__ import annotations

from functools import lru_cache
from importlib import metadata, resources

_DISTRIBUTION = "codeintel"


@lru_cache(maxsize=1)
def get_version() -> str:
    try:
        packaged = resources.files(_DISTRIBUTION).joinpath("VERSION")
        return packaged.read_text(encoding="utf-8").strip()
    except (FileNotFoundError, ModuleNotFoundError):
        pass
    try:
        return metadata.version(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return "unknown"


__version__ = get_version()

__all__ = ["get_version", "__version__"]
