"""
Version helpers for the vdf-beacon package.

Resolved from the installed distribution metadata when available, otherwise
the static :data:`BASE_VERSION` (source checkouts, vendored copies).
"""
from __future__ import annotations

from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version as _pkg_version

# Bump this when making intentional, source-level releases.
BASE_VERSION = "0.1.0"

_PKG_NAME = "vdf-beacon"


@lru_cache(maxsize=1)
def get_version() -> str:
    try:
        return _pkg_version(_PKG_NAME)
    except PackageNotFoundError:
        return BASE_VERSION


__version__ = get_version()

__all__ = ["__version__", "get_version", "BASE_VERSION"]
