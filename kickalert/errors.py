"""Error taxonomy for a budget check run.

Session and budget failures are fatal to the run; notification failures
are logged and swallowed by the alert dispatcher.
"""

from __future__ import annotations


class KickbaseError(Exception):
    """Base class for all errors raised by kickalert."""


class ApiError(KickbaseError):
    """Non-success HTTP status returned by the Kickbase API."""

    def __init__(self, status: int, body: str = "", url: str = ""):
        self.status = status
        self.body = body
        self.url = url
        super().__init__(f"HTTP {status} for {url} :: {body[:300]}")


class AuthenticationError(KickbaseError):
    """Login rejected or unreachable."""

    def __init__(self, message: str, status: int | None = None, body: str | None = None):
        self.status = status
        self.body = body
        super().__init__(message)


class ResolutionError(KickbaseError):
    """League discovery or budget fetch failed."""


class NotificationError(KickbaseError):
    """Outbound alert could not be handed to the messaging provider."""
