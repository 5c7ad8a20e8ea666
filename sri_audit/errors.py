"""
Error taxonomy for the audit service and consistent error
message extraction for the HTTP boundary.
"""

from __future__ import annotations


class SriAuditError(Exception):
    """Base class for all audit errors rendered to clients."""


class NotReadyError(SriAuditError):
    """The browser session has not finished launching."""


class InvalidHostError(SriAuditError):
    """The requested host does not start with an http(s) scheme."""


class DomainParseError(SriAuditError):
    """The host could not be split into a domain and public suffix."""


class NavigationError(SriAuditError):
    """The page failed to load."""


class NavigationTimeoutError(NavigationError):
    """The page did not finish loading within the navigation timeout."""


class LaunchError(SriAuditError):
    """The browser process could not be started."""


def get_error_message(error: BaseException | object) -> str:
    """
    Safely extract an error message from an unknown error type.

    Falls back to the exception class name when the exception
    carries no message, so clients never receive an empty string.
    """
    if isinstance(error, Exception):
        return str(error) or type(error).__name__
    return "Unknown error"
