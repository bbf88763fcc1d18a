"""File-system type index over a directory of JSON snapshots.

Build phase maps every type FQN to its snapshot file. TypeAstData is
parsed lazily, the first time a type is requested, and cached for the
lifetime of the index. The FQN map is persisted next to the snapshots so
later processes can skip the scan.
"""

from __future__ import annotations

import json
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from seqtrace.domain.exceptions.configuration import SnapshotDirectoryError
from seqtrace.domain.exceptions.snapshot import SnapshotError
from seqtrace.domain.model.method_id import strip_generics
from seqtrace.domain.model.type_ast_data import TypeAstData
from seqtrace.infrastructure.adapters.snapshot_loader import (
    SNAPSHOT_SUFFIX,
    load_snapshot,
    read_snapshot_json,
    snapshot_type_fqn,
)

logger = logging.getLogger(__name__)

CACHE_FILE_NAME = "type-index.cache.json"

_MISSING = object()


class FileSystemTypeIndex:
    """Type index backed by a snapshot directory.

    Build-once latch: load_or_build() runs the scan at most once per
    instance (unless rebuild() is called). Concurrent first callers block
    on the lock and observe the finished map. After the build, get() is
    safe to call from many threads.
    """

    def __init__(
        self,
        snapshot_dir: Path,
        *,
        use_cache: bool = True,
        max_workers: int | None = None,
    ) -> None:
        """Initialize index. Nothing is read until load_or_build().

        Args:
            snapshot_dir: Directory holding one JSON snapshot per type
            use_cache: Read and write the FQN map cache file
            max_workers: Worker threads for the scan (None = executor default)

        Raises:
            TypeError: If snapshot_dir is None
            ValueError: If max_workers < 1
        """
        if snapshot_dir is None:
            raise TypeError("snapshot_dir must not be None")
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")

        self._snapshot_dir = Path(snapshot_dir)
        self._use_cache = use_cache
        self._max_workers = max_workers
        self._lock = threading.RLock()
        self._built = False
        self._paths: dict[str, Path] = {}
        self._types: dict[str, TypeAstData | None] = {}

    @property
    def snapshot_dir(self) -> Path:
        """Directory the index reads from."""
        return self._snapshot_dir

    @property
    def cache_path(self) -> Path:
        """Location of the FQN map cache file."""
        return self._snapshot_dir / CACHE_FILE_NAME

    @property
    def is_built(self) -> bool:
        """load_or_build() has completed."""
        return self._built

    @property
    def type_names(self) -> frozenset[str]:
        """All indexed type FQNs."""
        self.load_or_build()
        return frozenset(self._paths)

    def __len__(self) -> int:
        self.load_or_build()
        return len(self._paths)

    def __contains__(self, type_fqn: object) -> bool:
        if not isinstance(type_fqn, str):
            return False
        self.load_or_build()
        return strip_generics(type_fqn) in self._paths

    def load_or_build(self) -> None:
        """Populate the FQN map once. Idempotent.

        Raises:
            SnapshotDirectoryError: If the snapshot directory does not exist
        """
        if self._built:
            return
        with self._lock:
            if self._built:
                return
            self._build(allow_cache=self._use_cache)
            self._built = True

    def rebuild(self) -> None:
        """Drop every cached entry and rescan the directory, ignoring the cache file.

        Raises:
            SnapshotDirectoryError: If the snapshot directory does not exist
        """
        with self._lock:
            self._built = False
            self._paths = {}
            self._types.clear()
            self._build(allow_cache=False)
            self._built = True

    def get(self, type_fqn: str) -> TypeAstData | None:
        """Get parsed data of a type, loading it on first request.

        Generic arguments are ignored: ``pkg.Box<pkg.Item>`` resolves
        ``pkg.Box``. A snapshot that fails to parse is logged and then
        reported as absent.

        Args:
            type_fqn: Fully qualified type name

        Returns:
            TypeAstData, or None if the type is not indexed
        """
        self.load_or_build()
        key = strip_generics(type_fqn)

        cached = self._types.get(key, _MISSING)
        if cached is not _MISSING:
            return cached  # type: ignore[return-value]

        with self._lock:
            cached = self._types.get(key, _MISSING)
            if cached is not _MISSING:
                return cached  # type: ignore[return-value]

            path = self._paths.get(key)
            if path is None:
                return None

            data: TypeAstData | None
            try:
                data = load_snapshot(path)
            except SnapshotError as e:
                logger.warning("type %s unavailable: %s", key, e)
                data = None
            self._types[key] = data
            return data

    # -------------------------------------------------------------------------
    # Build
    # -------------------------------------------------------------------------

    def _build(self, *, allow_cache: bool) -> None:
        if not self._snapshot_dir.exists():
            raise SnapshotDirectoryError(self._snapshot_dir, "does not exist")
        if not self._snapshot_dir.is_dir():
            raise SnapshotDirectoryError(self._snapshot_dir, "is not a directory")

        files = self._snapshot_files()

        if allow_cache:
            cached = self._load_cache(files)
            if cached is not None:
                self._paths = cached
                logger.info("loaded type index cache: %d types", len(cached))
                return

        self._paths = self._scan(files)
        logger.info("indexed %d types from %s", len(self._paths), self._snapshot_dir)

        if self._use_cache:
            self._save_cache(files)

    def _snapshot_files(self) -> list[Path]:
        return sorted(
            path
            for path in self._snapshot_dir.rglob(f"*{SNAPSHOT_SUFFIX}")
            if path.is_file() and path.name != CACHE_FILE_NAME
        )

    def _scan(self, files: list[Path]) -> dict[str, Path]:
        paths: dict[str, Path] = {}
        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            for path, type_fqn in zip(files, executor.map(_read_type_name, files), strict=True):
                if type_fqn is None:
                    continue
                if type_fqn in paths:
                    logger.warning(
                        "duplicate snapshot for %s: keeping %s, ignoring %s",
                        type_fqn,
                        paths[type_fqn],
                        path,
                    )
                    continue
                paths[type_fqn] = path
        return paths

    # -------------------------------------------------------------------------
    # Cache file
    # -------------------------------------------------------------------------

    def _load_cache(self, files: list[Path]) -> dict[str, Path] | None:
        cache = self.cache_path
        if not cache.is_file():
            return None

        try:
            cache_mtime = cache.stat().st_mtime
            newest = max((f.stat().st_mtime for f in files), default=0.0)
            if cache_mtime < newest:
                logger.debug("type index cache is stale: %s", cache)
                return None
            raw = json.loads(cache.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("ignoring unreadable type index cache %s: %s", cache, e)
            return None

        scanned = raw.get("files") if isinstance(raw, dict) else None
        types = raw.get("types") if isinstance(raw, dict) else None
        if not isinstance(scanned, list) or not isinstance(types, dict):
            logger.warning("ignoring malformed type index cache %s", cache)
            return None

        if set(scanned) != {self._relative(f) for f in files}:
            logger.debug("type index cache does not match snapshot files: %s", cache)
            return None

        paths = {str(fqn): self._snapshot_dir / str(rel) for fqn, rel in types.items()}
        if not all(p.is_file() for p in paths.values()):
            logger.debug("type index cache references missing files: %s", cache)
            return None
        return paths

    def _save_cache(self, files: list[Path]) -> None:
        payload = {
            "files": [self._relative(f) for f in files],
            "types": {fqn: self._relative(path) for fqn, path in sorted(self._paths.items())},
        }
        try:
            self.cache_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("cannot write type index cache %s: %s", self.cache_path, e)

    def _relative(self, path: Path) -> str:
        return path.relative_to(self._snapshot_dir).as_posix()


def _read_type_name(path: Path) -> str | None:
    """Type FQN declared by snapshot file, None (with warning) if unusable."""
    try:
        data = read_snapshot_json(path)
    except SnapshotError as e:
        logger.warning("skipping snapshot: %s", e)
        return None

    type_fqn = snapshot_type_fqn(data)
    if type_fqn is None:
        logger.warning("skipping snapshot %s: no typeFqn or name", path)
    return type_fqn
