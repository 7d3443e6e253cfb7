from __future__ import annotations

from importlib import metadata

DIST_NAME = "templar-compiler"


def tool_version() -> str:
    """
    Version of the installed distribution, "0.0.0" when running from a bare checkout.
    Does not depend on other modules (to avoid import cycles).
    """
    try:
        return metadata.version(DIST_NAME)
    except metadata.PackageNotFoundError:
        return "0.0.0"

__all__ = ["tool_version"]
