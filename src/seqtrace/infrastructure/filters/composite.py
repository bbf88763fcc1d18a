"""Composite filter: exclude when any member excludes (OR)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from seqtrace.domain.ports.trace_filter import TraceFilter
    from seqtrace.domain.ports.type_index import TypeIndexPort


@dataclass(frozen=True, slots=True)
class ExcludeAny:
    """Filter that excludes if ANY member filter excludes.

    Empty filters = excludes nothing.

    Attributes:
        filters: Member filters, consulted in order
    """

    filters: tuple[TraceFilter, ...] = ()

    def should_exclude(self, method_id: str, index: TypeIndexPort | None) -> bool:
        """True if any member excludes the method."""
        return any(f.should_exclude(method_id, index) for f in self.filters)

    def should_exclude_call(
        self,
        callee_type: str,
        method_name: str,
        index: TypeIndexPort | None,
    ) -> bool:
        """True if any member excludes the call."""
        return any(f.should_exclude_call(callee_type, method_name, index) for f in self.filters)


def exclude_any(*filters: TraceFilter) -> ExcludeAny:
    """Create filter that excludes when ANY filter excludes (OR).

    Args:
        *filters: Filters to compose.

    Returns:
        Composite filter.
    """
    return ExcludeAny(filters=filters)
