"""Per-type parsed AST data."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from seqtrace.domain.model.annotation import AnnotationInfo
from seqtrace.domain.model.call_site import CallSiteNode, chain_heads
from seqtrace.domain.model.enums import TypeKind
from seqtrace.domain.model.fragment_block import FragmentNode
from seqtrace.domain.model.method_declaration import MethodDeclaration
from seqtrace.domain.model.method_id import method_name_of, parameter_types_of, simple_name_of


@dataclass(frozen=True, slots=True)
class TypeAstData:
    """Parsed data of one type, as produced by the semantic parser.

    Immutable value object. Owned by the type index, shared read-only
    between concurrent traces.

    Attributes:
        type_fqn: Fully qualified type name (e.g., "com.example.UserService")
        package_name: Enclosing package ("" for the default package)
        absolute_path: Absolute path of the source file
        relative_path: Source path relative to its source root
        kind: Declared type kind
        methods: Method declarations, in source order
        field_names: Declared field names
        annotations: Annotations on the type declaration
    """

    type_fqn: str
    package_name: str
    absolute_path: Path
    relative_path: Path | None = None
    kind: TypeKind = TypeKind.CLASS
    methods: tuple[MethodDeclaration, ...] = ()
    field_names: frozenset[str] = frozenset()
    annotations: tuple[AnnotationInfo, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.type_fqn:
            raise ValueError("type_fqn must not be empty")
        if self.package_name is None:
            raise TypeError("package_name must not be None (use empty string)")
        if self.absolute_path is None:
            raise TypeError("absolute_path must not be None")

    @property
    def simple_name(self) -> str:
        """Type name without package."""
        return simple_name_of(self.type_fqn)

    def find_method(self, method_id: str) -> MethodDeclaration | None:
        """Find declaration for method id.

        Exact parameter match wins (compared by simple type names).
        Otherwise first declaration with the same simple name, so name-only
        ids like ``pkg.A.run()`` still resolve overloaded methods.

        Args:
            method_id: MethodId of the wanted method

        Returns:
            Declaration or None if the type declares no such method
        """
        name = method_name_of(method_id)
        if not name:
            return None

        candidates = [m for m in self.methods if m.name == name]
        if not candidates:
            return None

        wanted = tuple(simple_name_of(p) for p in parameter_types_of(method_id))
        for method in candidates:
            if tuple(simple_name_of(p) for p in method.parameter_types) == wanted:
                return method
        return candidates[0]

    def find_call_sites(self, method: MethodDeclaration) -> tuple[CallSiteNode, ...]:
        """Direct call sites of method body, in source order.

        Calls that are the continuation of a fluent chain are left out:
        they are reached through the head call's next_chained_call.
        """
        return tuple(sorted(chain_heads(method.calls), key=lambda call: call.line))

    def find_fragments(self, method: MethodDeclaration) -> tuple[FragmentNode, ...]:
        """Top-level control-flow blocks of method body, in source order.

        Blocks enclosed by another listed block are nested detail of that
        block and are left out.
        """
        fragments = method.fragments
        top_level = [f for f in fragments if not any(other.encloses(f) for other in fragments)]
        return tuple(sorted(top_level, key=lambda f: f.start_line))

    def has_method(self, name: str) -> bool:
        """Check if type declares a method with this simple name."""
        return any(m.name == name for m in self.methods)

    def has_field(self, name: str) -> bool:
        """Check if type declares a field with this name."""
        return name in self.field_names
