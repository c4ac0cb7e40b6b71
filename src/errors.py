"""
Errors raised at the resolver boundary.

Each error carries a machine-readable code, a human-readable message and
optional details, matching the structured error envelope:

    {"code": "NO_RECORDS", "message": "...", "details": {"domain": "..."}}
"""

from typing import Any


class ResolverError(Exception):
    """Base class for all resolver errors."""

    code: str = "RESOLVER_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Render the error as a structured envelope."""
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class NoRecords(ResolverError):
    """Neither MX nor A records exist for a domain."""

    code = "NO_RECORDS"


class BadAddress(ResolverError):
    """An IP literal could not be parsed."""

    code = "BAD_ADDRESS"


class UpstreamFailure(ResolverError):
    """The DNS client reported a transport or parse failure."""

    code = "UPSTREAM_FAILURE"
