"""Trace filter port.

Filters decide whether a method or call edge is excluded from tracing
and rendering. True = exclude.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from seqtrace.domain.ports.type_index import TypeIndexPort


class TraceFilter(Protocol):
    """Contract for exclusion policies.

    Implementations are pure functions of their inputs plus the index
    and must not mutate the index.
    """

    def should_exclude(self, method_id: str, index: TypeIndexPort | None) -> bool:
        """Check if a method should not be traced.

        Args:
            method_id: MethodId being considered
            index: Type index for structural queries (None at render time)

        Returns:
            True if the method must be excluded
        """
        ...

    def should_exclude_call(
        self,
        callee_type: str,
        method_name: str,
        index: TypeIndexPort | None,
    ) -> bool:
        """Check if a call site should be dropped, before a MethodId exists.

        Args:
            callee_type: Resolved receiver type FQN
            method_name: Invoked method name
            index: Type index for structural queries (None at render time)

        Returns:
            True if the call must be excluded
        """
        ...


@dataclass(frozen=True, slots=True)
class ExcludeNothing:
    """Filter that keeps every method and call.

    Default filter of SequenceOutputConfig.
    """

    def should_exclude(self, method_id: str, index: TypeIndexPort | None) -> bool:
        return False

    def should_exclude_call(
        self,
        callee_type: str,
        method_name: str,
        index: TypeIndexPort | None,
    ) -> bool:
        return False
