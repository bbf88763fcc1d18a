"""Domain exceptions."""

from seqtrace.domain.exceptions.base import SeqTraceError
from seqtrace.domain.exceptions.configuration import ConfigurationError, SnapshotDirectoryError
from seqtrace.domain.exceptions.snapshot import SnapshotError

__all__ = [
    "ConfigurationError",
    "SeqTraceError",
    "SnapshotDirectoryError",
    "SnapshotError",
]
