"""Source extractor: the source files that explain one entry point.

Traces the entry point, collects the types it reaches inside the scope
and merges their sources into one text (e.g. as context for a reviewer
or a prompt).
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import TYPE_CHECKING

from seqtrace.application.services.tracer import SequenceTracer
from seqtrace.domain.exceptions.base import SeqTraceError
from seqtrace.domain.model.configuration import SequenceOutputConfig
from seqtrace.domain.model.method_id import in_scope, method_name_of, strip_generics, type_fqn_of
from seqtrace.domain.ports.type_index import BuildableTypeIndex

if TYPE_CHECKING:
    from seqtrace.domain.model.type_ast_data import TypeAstData
    from seqtrace.domain.ports.type_index import TypeIndexPort

logger = logging.getLogger(__name__)

ELISION_MARKER = "    // ..."


@dataclass(frozen=True, slots=True)
class CodeExtractionRequest:
    """What to extract.

    Attributes:
        entry_method_id: MethodId of the entry point
        base_packages: Scope prefixes for tracing and for kept types
        max_depth: Trace depth
        only_used_methods: Keep only declarations of invoked methods
        include_imports: Keep package/import lines when trimming methods
    """

    entry_method_id: str
    base_packages: frozenset[str]
    max_depth: int = 3
    only_used_methods: bool = False
    include_imports: bool = True

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.entry_method_id:
            raise ValueError("entry_method_id must not be empty")
        if isinstance(self.base_packages, str):
            raise TypeError("base_packages must be a collection of prefixes, not a string")
        if not isinstance(self.base_packages, frozenset):
            object.__setattr__(self, "base_packages", frozenset(self.base_packages))


@dataclass(frozen=True, slots=True)
class CodeExtractionResult:
    """Merged sources of an entry point.

    Attributes:
        entry_method_id: Entry point the extraction started from
        involved_types: Types whose source is in merged_source
        merged_source: Concatenated sources, one header per type
        total_types: len(involved_types)
        total_lines: Line count of merged_source
        error_message: Set when extraction failed, merged_source is then ""
    """

    entry_method_id: str
    involved_types: frozenset[str]
    merged_source: str
    total_types: int
    total_lines: int
    error_message: str | None = None

    @property
    def succeeded(self) -> bool:
        """Extraction ran without error."""
        return self.error_message is None

    @classmethod
    def empty(cls, entry_method_id: str, error_message: str | None = None) -> CodeExtractionResult:
        """Create result with no sources."""
        return cls(
            entry_method_id=entry_method_id,
            involved_types=frozenset(),
            merged_source="",
            total_types=0,
            total_lines=0,
            error_message=error_message,
        )


class CodeExtractor:
    """Extracts and merges the sources involved in an entry point."""

    def __init__(self, source: SequenceTracer | TypeIndexPort) -> None:
        """Initialize extractor.

        Args:
            source: Tracer to reuse, or type index to trace against
        """
        if source is None:
            raise TypeError("source must not be None")
        self._tracer = source if isinstance(source, SequenceTracer) else SequenceTracer(source)
        self._index = self._tracer.index

    def extract(self, request: CodeExtractionRequest) -> CodeExtractionResult:
        """Trace request's entry point and merge the involved sources.

        Never raises for data problems: an entry outside the scope gives an
        empty result, unreadable sources are skipped, and index errors are
        reported in error_message.
        """
        logger.info("extracting sources for %s", request.entry_method_id)

        entry_type = strip_generics(type_fqn_of(request.entry_method_id))
        if not in_scope(entry_type, request.base_packages):
            logger.warning("entry type %s is outside of %s", entry_type, sorted(request.base_packages))
            return CodeExtractionResult.empty(request.entry_method_id)

        try:
            sections = self._extract_sections(request)
        except SeqTraceError as e:
            logger.error("source extraction failed for %s: %s", request.entry_method_id, e)
            return CodeExtractionResult.empty(request.entry_method_id, error_message=str(e))

        merged = "\n".join(text for _, text in sections)
        result = CodeExtractionResult(
            entry_method_id=request.entry_method_id,
            involved_types=frozenset(type_fqn for type_fqn, _ in sections),
            merged_source=merged,
            total_types=len(sections),
            total_lines=len(merged.splitlines()),
        )
        logger.info(
            "extracted %d types, %d lines for %s",
            result.total_types,
            result.total_lines,
            request.entry_method_id,
        )
        return result

    def _extract_sections(self, request: CodeExtractionRequest) -> list[tuple[str, str]]:
        if isinstance(self._index, BuildableTypeIndex):
            self._index.load_or_build()

        config = SequenceOutputConfig(depth=request.max_depth, base_packages=request.base_packages)
        trace = self._tracer.trace(request.entry_method_id, config)

        methods_by_type: defaultdict[str, set[str]] = defaultdict(set)
        for method_id in trace.involved_method_ids():
            type_fqn = strip_generics(type_fqn_of(method_id))
            if not type_fqn:
                logger.warning("cannot determine type of %s", method_id)
                continue
            methods_by_type[type_fqn].add(method_name_of(method_id))

        sections: list[tuple[str, str]] = []
        for type_fqn in sorted(methods_by_type):
            if not in_scope(type_fqn, request.base_packages):
                logger.debug("skipping out-of-scope type %s", type_fqn)
                continue

            data = self._index.get(type_fqn)
            if data is None:
                logger.warning("no index entry for %s, source skipped", type_fqn)
                continue

            source = _read_source(data)
            if source is None:
                continue

            if request.only_used_methods:
                source = keep_methods(source, data, methods_by_type[type_fqn], request.include_imports)
            sections.append((type_fqn, f"{source_header(data)}\n{source}"))
        return sections


def source_header(data: TypeAstData) -> str:
    """Separator line introducing one type's source."""
    location = data.relative_path or data.absolute_path
    return f"// ===== {data.type_fqn} ({location.as_posix()}) ====="


def keep_methods(
    source: str,
    data: TypeAstData,
    method_names: set[str],
    include_imports: bool,
) -> str:
    """Reduce source to the declarations of the named methods.

    Skipped stretches are replaced by a single elision marker line.

    Args:
        source: Full source text of the type
        data: Index data with method line ranges
        method_names: Simple names of methods to keep
        include_imports: Also keep package and import lines
    """
    lines = source.splitlines()
    keep: set[int] = set()

    if include_imports:
        keep.update(
            number
            for number, line in enumerate(lines, start=1)
            if line.lstrip().startswith(("package ", "import "))
        )
    for method in data.methods:
        if method.name in method_names:
            keep.update(range(method.start_line, method.end_line + 1))

    kept: list[str] = []
    elided = False
    for number, line in enumerate(lines, start=1):
        if number in keep:
            kept.append(line)
            elided = False
        elif not elided:
            kept.append(ELISION_MARKER)
            elided = True
    return "\n".join(kept)


def _read_source(data: TypeAstData) -> str | None:
    try:
        return data.absolute_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("cannot read source of %s: %s", data.type_fqn, e)
        return None
