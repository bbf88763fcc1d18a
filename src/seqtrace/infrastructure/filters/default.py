"""Exclusion-list trace filter."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from seqtrace.domain.model.method_id import method_name_of, type_fqn_of

if TYPE_CHECKING:
    from seqtrace.domain.ports.type_index import TypeIndexPort

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DefaultTraceFilter:
    """Filter driven by explicit exclusion lists.

    Rules:
    1. Type FQN equal to or starting with an excluded prefix
       (e.g., "java.", "org.springframework.").
    2. Method simple name in the excluded names (e.g., "toString").

    Empty method ids and empty method names are always excluded.

    Attributes:
        excluded_type_prefixes: Type name prefixes to exclude
        excluded_method_names: Exact method names to exclude
    """

    excluded_type_prefixes: frozenset[str] = frozenset()
    excluded_method_names: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        for name, value in (
            ("excluded_type_prefixes", self.excluded_type_prefixes),
            ("excluded_method_names", self.excluded_method_names),
        ):
            if isinstance(value, str):
                raise TypeError(f"{name} must be a collection, not a string")
            if not isinstance(value, frozenset):
                object.__setattr__(self, name, frozenset(value))

    def should_exclude(self, method_id: str, index: TypeIndexPort | None) -> bool:
        """Exclude by owning type prefix or method name."""
        if not method_id:
            return True
        return self._excluded(type_fqn_of(method_id), method_name_of(method_id))

    def should_exclude_call(
        self,
        callee_type: str,
        method_name: str,
        index: TypeIndexPort | None,
    ) -> bool:
        """Exclude call by receiver type prefix or method name."""
        if not method_name:
            return True
        return self._excluded(callee_type, method_name)

    def _excluded(self, type_fqn: str, method_name: str) -> bool:
        if type_fqn and any(type_fqn.startswith(p) for p in self.excluded_type_prefixes):
            logger.debug("excluded by type prefix: %s", type_fqn)
            return True
        if method_name in self.excluded_method_names:
            logger.debug("excluded by method name: %s.%s", type_fqn, method_name)
            return True
        return False
