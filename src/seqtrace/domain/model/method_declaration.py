"""Method declaration node from a type snapshot."""

from __future__ import annotations

from dataclasses import dataclass

from seqtrace.domain.model.annotation import AnnotationInfo
from seqtrace.domain.model.call_site import CallSiteNode
from seqtrace.domain.model.fragment_block import FragmentNode
from seqtrace.domain.model.method_id import make_method_id


@dataclass(frozen=True, slots=True)
class MethodDeclaration:
    """Method declared by an indexed type.

    Attributes:
        name: Simple method name
        parameter_types: Parameter type names, in order
        start_line: First line of the declaration
        end_line: Last line of the declaration
        return_type: Declared return type, None for constructors
        calls: Call sites directly in the body (outside fragments)
        fragments: Control-flow blocks of the body
        annotations: Annotations on the declaration
    """

    name: str
    parameter_types: tuple[str, ...]
    start_line: int
    end_line: int
    return_type: str | None = None
    calls: tuple[CallSiteNode, ...] = ()
    fragments: tuple[FragmentNode, ...] = ()
    annotations: tuple[AnnotationInfo, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("name must not be empty")
        if self.end_line < self.start_line:
            raise ValueError(f"end_line ({self.end_line}) must be >= start_line ({self.start_line})")

    @property
    def signature(self) -> str:
        """``name(paramType,...)``."""
        return f"{self.name}({','.join(self.parameter_types)})"

    def method_id(self, type_fqn: str) -> str:
        """Full MethodId of this declaration within type_fqn."""
        return make_method_id(type_fqn, self.name, self.parameter_types)
