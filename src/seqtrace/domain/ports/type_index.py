"""Type index port (interface)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from seqtrace.domain.model.type_ast_data import TypeAstData


class TypeIndexPort(Protocol):
    """Lookup of per-type AST data by fully qualified type name.

    Implementations must support concurrent reads once built.
    """

    def get(self, type_fqn: str) -> TypeAstData | None:
        """Get parsed data of a type.

        Args:
            type_fqn: Fully qualified type name

        Returns:
            TypeAstData, or None if the type is not indexed
        """
        ...


@runtime_checkable
class BuildableTypeIndex(TypeIndexPort, Protocol):
    """Type index with an explicit one-time build phase."""

    def load_or_build(self) -> None:
        """Build the index once. Later calls return immediately."""
        ...
