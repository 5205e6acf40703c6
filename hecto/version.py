from __future__ import annotations

import importlib.metadata

DISTRIBUTION = "hecto"
FALLBACK_VERSION = "0.1.0"


def get_version() -> str:
    """Version of the installed distribution, or the source fallback."""
    try:
        return importlib.metadata.version(DISTRIBUTION)
    except importlib.metadata.PackageNotFoundError:
        # Running from a source checkout that was never installed
        return FALLBACK_VERSION


def get_version_string() -> str:
    return f"hecto {get_version()}"
