"""In-memory type index."""

from __future__ import annotations

from collections.abc import Iterable

from seqtrace.domain.model.method_id import strip_generics
from seqtrace.domain.model.type_ast_data import TypeAstData


class InMemoryTypeIndex:
    """Type index over already-built TypeAstData values.

    For callers that parsed in-process. Read-only after construction.
    """

    def __init__(self, types: Iterable[TypeAstData] = ()) -> None:
        self._types: dict[str, TypeAstData] = {}
        for data in types:
            if data.type_fqn in self._types:
                raise ValueError(f"duplicate type: {data.type_fqn}")
            self._types[data.type_fqn] = data

    @classmethod
    def from_types(cls, *types: TypeAstData) -> InMemoryTypeIndex:
        """Create index holding the given types."""
        return cls(types)

    @property
    def type_names(self) -> frozenset[str]:
        """All indexed type FQNs."""
        return frozenset(self._types)

    def __len__(self) -> int:
        return len(self._types)

    def __contains__(self, type_fqn: object) -> bool:
        return isinstance(type_fqn, str) and strip_generics(type_fqn) in self._types

    def get(self, type_fqn: str) -> TypeAstData | None:
        """Get type data by FQN, generics ignored."""
        return self._types.get(strip_generics(type_fqn))
