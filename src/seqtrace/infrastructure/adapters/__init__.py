"""Type index adapters."""

from seqtrace.infrastructure.adapters.memory_index import InMemoryTypeIndex
from seqtrace.infrastructure.adapters.snapshot_loader import load_snapshot, parse_snapshot
from seqtrace.infrastructure.adapters.type_index import CACHE_FILE_NAME, FileSystemTypeIndex

__all__ = [
    "CACHE_FILE_NAME",
    "FileSystemTypeIndex",
    "InMemoryTypeIndex",
    "load_snapshot",
    "parse_snapshot",
]
