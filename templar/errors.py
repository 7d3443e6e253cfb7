"""
Base exception for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from TemplarUserError.

Programming errors and bugs should NOT inherit from TemplarUserError;
they will propagate with full tracebacks.
"""

from __future__ import annotations


class TemplarUserError(Exception):
    """
    Base class for all user-facing errors in Templar.

    These errors indicate problems that the user can fix:
    malformed templates, failing expressions, missing files, bad configuration.
    """
    pass


__all__ = ["TemplarUserError"]
