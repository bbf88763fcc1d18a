"""Snapshot exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from seqtrace.domain.exceptions.base import SeqTraceError

if TYPE_CHECKING:
    from pathlib import Path


class SnapshotError(SeqTraceError):
    """Error while reading one serialized type snapshot.

    Recovered locally by the type index: the file is skipped.

    Attributes:
        path: Snapshot file that failed to load
        reason: Why loading failed
    """

    def __init__(self, path: Path, reason: str) -> None:
        # FAIL-FIRST: validate required parameters
        if path is None:
            raise TypeError("path must not be None")
        if not reason:
            raise ValueError("reason must be non-empty string")

        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load snapshot {path}: {reason}")
