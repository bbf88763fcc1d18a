"""Accessor pairing heuristic.

A getter is treated as plain property access, and skipped, when the
type also declares the matching setter (and vice versa).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from seqtrace.domain.model.method_id import method_name_of, strip_generics, type_fqn_of

if TYPE_CHECKING:
    from seqtrace.domain.ports.type_index import TypeIndexPort

logger = logging.getLogger(__name__)

_GETTER_PREFIXES = ("get", "is")
_SETTER_PREFIX = "set"


def accessor_property(method_name: str) -> str | None:
    """Property name of getX/isX/setX, None if not accessor-shaped."""
    for prefix in (*_GETTER_PREFIXES, _SETTER_PREFIX):
        rest = method_name[len(prefix) :]
        if method_name.startswith(prefix) and rest[:1].isupper():
            return rest
    return None


def counterparts(method_name: str) -> tuple[str, ...]:
    """Names completing the accessor pair of method_name."""
    prop = accessor_property(method_name)
    if prop is None:
        return ()
    if method_name.startswith(_SETTER_PREFIX):
        return tuple(f"{prefix}{prop}" for prefix in _GETTER_PREFIXES)
    return (f"{_SETTER_PREFIX}{prop}",)


@dataclass(frozen=True, slots=True)
class AccessorPairFilter:
    """Exclude getters/setters whose counterpart exists on the same type.

    Needs the type index. Without it (render time) nothing is excluded.
    """

    def should_exclude(self, method_id: str, index: TypeIndexPort | None) -> bool:
        """Exclude accessor method if its pair exists."""
        return self.should_exclude_call(type_fqn_of(method_id), method_name_of(method_id), index)

    def should_exclude_call(
        self,
        callee_type: str,
        method_name: str,
        index: TypeIndexPort | None,
    ) -> bool:
        """Exclude accessor call if its pair exists."""
        if index is None or not callee_type:
            return False

        names = counterparts(method_name)
        if not names:
            return False

        data = index.get(strip_generics(callee_type))
        if data is None:
            return False

        if any(data.has_method(name) for name in names):
            logger.debug("excluded accessor: %s.%s", callee_type, method_name)
            return True
        return False
