"""Test factories for creating snapshot and trace objects.

Centralized factory functions to avoid duplication across test modules.
All factories follow the same pattern: accept simplified parameters,
return fully constructed domain objects.
"""

import json
from pathlib import Path
from typing import Any

from seqtrace.domain.model.annotation import AnnotationInfo
from seqtrace.domain.model.call_site import CallSiteNode
from seqtrace.domain.model.configuration import SequenceOutputConfig
from seqtrace.domain.model.diagram_node import Interaction
from seqtrace.domain.model.enums import FragmentKind
from seqtrace.domain.model.fragment_block import FragmentNode
from seqtrace.domain.model.method_declaration import MethodDeclaration
from seqtrace.domain.model.type_ast_data import TypeAstData
from seqtrace.infrastructure.adapters.memory_index import InMemoryTypeIndex

# Default source path - consistent across all tests
DEFAULT_SOURCE_FILE = Path("/src/Test.java")

# Default scope used by tracer tests
DEFAULT_SCOPE = frozenset({"pkg."})


def make_call(
    callee: str,
    method_name: str,
    line: int = 1,
    *,
    caller: str = "pkg.A",
    arguments: tuple[str, ...] = (),
    method_id: str | None = None,
    return_type: str | None = None,
    assigned_to: str | None = None,
    next_chained_call: CallSiteNode | None = None,
) -> CallSiteNode:
    """Create a CallSiteNode for tests.

    Args:
        callee: Receiver type FQN
        method_name: Invoked method name
        line: Source line (default 1)
        caller: Enclosing type FQN (default "pkg.A")
        arguments: Argument texts
        method_id: Resolved MethodId, if any
        return_type: Return type FQN, if any
        assigned_to: Result variable, if any
        next_chained_call: Next chain link, if any

    Returns:
        CallSiteNode instance
    """
    return CallSiteNode(
        caller=caller,
        callee=callee,
        method_name=method_name,
        line=line,
        arguments=arguments,
        method_id=method_id,
        return_type=return_type,
        assigned_to=assigned_to,
        next_chained_call=next_chained_call,
    )


def make_fragment(
    kind: FragmentKind,
    condition: str,
    start_line: int,
    end_line: int,
    *,
    condition_calls: tuple[CallSiteNode, ...] = (),
    content_calls: tuple[CallSiteNode, ...] = (),
    alternatives: tuple[FragmentNode, ...] = (),
    first_alternative: bool = True,
) -> FragmentNode:
    """Create a FragmentNode for tests."""
    return FragmentNode(
        kind=kind,
        condition=condition,
        start_line=start_line,
        end_line=end_line,
        condition_calls=condition_calls,
        content_calls=content_calls,
        alternatives=alternatives,
        first_alternative=first_alternative,
    )


def make_method(
    name: str,
    *calls: CallSiteNode,
    parameter_types: tuple[str, ...] = (),
    start_line: int = 1,
    end_line: int = 100,
    fragments: tuple[FragmentNode, ...] = (),
    annotations: tuple[AnnotationInfo, ...] = (),
    return_type: str | None = "void",
) -> MethodDeclaration:
    """Create a MethodDeclaration whose body holds the given calls.

    Args:
        name: Method name
        *calls: Direct call sites of the body
        parameter_types: Declared parameter types
        start_line: First line (default 1)
        end_line: Last line (default 100)
        fragments: Control-flow blocks of the body
        annotations: Method annotations
        return_type: Declared return type (default "void")

    Returns:
        MethodDeclaration instance
    """
    return MethodDeclaration(
        name=name,
        parameter_types=parameter_types,
        start_line=start_line,
        end_line=end_line,
        return_type=return_type,
        calls=calls,
        fragments=fragments,
        annotations=annotations,
    )


def make_type(
    type_fqn: str,
    *methods: MethodDeclaration,
    field_names: frozenset[str] = frozenset(),
    annotations: tuple[AnnotationInfo, ...] = (),
    absolute_path: Path = DEFAULT_SOURCE_FILE,
    relative_path: Path | None = None,
) -> TypeAstData:
    """Create TypeAstData; package is derived from the FQN."""
    package = type_fqn.rsplit(".", 1)[0] if "." in type_fqn else ""
    return TypeAstData(
        type_fqn=type_fqn,
        package_name=package,
        absolute_path=absolute_path,
        relative_path=relative_path,
        methods=methods,
        field_names=field_names,
        annotations=annotations,
    )


def make_index(*types: TypeAstData) -> InMemoryTypeIndex:
    """Create in-memory index holding types."""
    return InMemoryTypeIndex.from_types(*types)


def make_config(depth: int = 2, **kwargs: Any) -> SequenceOutputConfig:
    """Create config scoped to DEFAULT_SCOPE unless overridden."""
    kwargs.setdefault("base_packages", DEFAULT_SCOPE)
    return SequenceOutputConfig(depth=depth, **kwargs)


def make_interaction(
    callee: str,
    method_name: str,
    line: int = 1,
    *,
    caller: str = "pkg.A",
    internal_calls: tuple = (),
    next_chained_call: Interaction | None = None,
    arguments: tuple[str, ...] = (),
    return_type: str | None = None,
    assigned_to: str | None = None,
) -> Interaction:
    """Create an Interaction (trace node) for renderer tests."""
    return Interaction(
        caller=caller,
        callee=callee,
        method_name=method_name,
        line=line,
        arguments=arguments,
        return_type=return_type,
        assigned_to=assigned_to,
        next_chained_call=next_chained_call,
        internal_calls=internal_calls,
    )


def snapshot_payload(type_fqn: str, methods: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    """Minimal camelCase snapshot mapping for type_fqn."""
    package, _, name = type_fqn.rpartition(".")
    return {
        "typeFqn": type_fqn,
        "packageName": package,
        "name": name,
        "kind": "class",
        "absolutePath": f"/src/{type_fqn.replace('.', '/')}.java",
        "relativePath": f"{type_fqn.replace('.', '/')}.java",
        "methods": methods or [],
    }


def write_snapshot(directory: Path, type_fqn: str, payload: dict[str, Any] | None = None) -> Path:
    """Write snapshot JSON for type_fqn into directory.

    Returns:
        Path of the written file
    """
    path = directory / f"{type_fqn}.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload or snapshot_payload(type_fqn)), encoding="utf-8")
    return path
