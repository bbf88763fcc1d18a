"""Configuration exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from seqtrace.domain.exceptions.base import SeqTraceError

if TYPE_CHECKING:
    from pathlib import Path


class ConfigurationError(SeqTraceError):
    """Invalid or unusable configuration.

    Fatal to the caller, never retried automatically.

    Attributes:
        reason: Why configuration is invalid (must not be empty)
    """

    def __init__(self, reason: str) -> None:
        if not reason:
            raise ValueError("reason must not be empty")

        self.reason = reason
        super().__init__(f"Invalid configuration: {reason}")


class SnapshotDirectoryError(ConfigurationError):
    """Snapshot directory is missing or is not a directory.

    Attributes:
        path: Directory that was configured
        reason: Why it cannot be used
    """

    def __init__(self, path: Path, reason: str) -> None:
        if path is None:
            raise TypeError("path must not be None")

        self.path = path
        super().__init__(f"snapshot directory {path}: {reason}")
