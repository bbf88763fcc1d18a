"""Sequence trace configuration."""

from __future__ import annotations

from dataclasses import dataclass, field

from seqtrace.domain.ports.trace_filter import ExcludeNothing, TraceFilter


@dataclass(frozen=True, slots=True)
class SequenceOutputConfig:
    """Configuration of one trace/render call.

    Immutable, safely shared read-only across concurrent traces.
    Valid but useless values (depth 0, empty scope) trace nothing
    instead of raising.

    Attributes:
        depth: Max method-body crossings from the entry point
        base_packages: Scope prefixes. A method is followed only if its
            MethodId starts with one of them. Empty = follow nothing.
        hide_details_in_conditionals: Do not render calls inside
            condition evaluation and block bodies
        hide_details_in_chain_expression: Do not render what happens
            inside called methods (internal calls)
        filter: Exclusion policy, applied while tracing and again while
            rendering
    """

    depth: int = 1
    base_packages: frozenset[str] = frozenset()
    hide_details_in_conditionals: bool = False
    hide_details_in_chain_expression: bool = False
    filter: TraceFilter = field(default_factory=ExcludeNothing)

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST on programmer errors only."""
        if isinstance(self.base_packages, str):
            raise TypeError("base_packages must be a collection of prefixes, not a string")
        if not isinstance(self.base_packages, frozenset):
            object.__setattr__(self, "base_packages", frozenset(self.base_packages))
        if self.filter is None:
            raise TypeError("filter must not be None")

    @property
    def traces_nothing(self) -> bool:
        """Depth or scope make every trace empty."""
        return self.depth <= 0 or not self.base_packages
