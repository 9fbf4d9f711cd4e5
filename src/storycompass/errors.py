"""Exception types raised by the badge scoring engine."""

from __future__ import annotations


class BadgeScoreError(Exception):
    """Base class for failures surfaced by badge score calculations."""


class InvalidArgumentError(BadgeScoreError, ValueError):
    """Raised when a caller supplies a malformed bundle id or percentile list."""


class NotFoundError(BadgeScoreError, KeyError):
    """Raised when a referenced content bundle does not exist."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable.
        return str(self.args[0]) if self.args else ""


__all__ = ["BadgeScoreError", "InvalidArgumentError", "NotFoundError"]
