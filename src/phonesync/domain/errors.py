"""Errors raised across the phonesync domain and adapters."""

from __future__ import annotations


class PhoneSyncError(Exception):
    """Base error for this package."""


class SourceError(PhoneSyncError):
    """Raised when a change-log or patient source cannot be read or is malformed."""

    def __init__(self, message: str, *, location: str | None = None) -> None:
        super().__init__(message)
        self.location = location
