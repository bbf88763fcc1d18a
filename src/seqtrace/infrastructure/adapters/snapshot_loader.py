"""JSON snapshot loader.

Converts one serialized per-type snapshot (camelCase JSON written by the
semantic parser) into an immutable TypeAstData. Unknown keys are ignored.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from seqtrace.domain.exceptions.snapshot import SnapshotError
from seqtrace.domain.model.annotation import AnnotationInfo
from seqtrace.domain.model.call_site import CallSiteNode
from seqtrace.domain.model.enums import FragmentKind, TypeKind
from seqtrace.domain.model.fragment_block import FragmentNode
from seqtrace.domain.model.method_declaration import MethodDeclaration
from seqtrace.domain.model.method_id import simple_name_of
from seqtrace.domain.model.type_ast_data import TypeAstData

SNAPSHOT_SUFFIX = ".json"


def read_snapshot_json(path: Path) -> Mapping[str, Any]:
    """Read raw snapshot mapping.

    Raises:
        SnapshotError: If file cannot be read or is not a JSON object
    """
    try:
        with path.open(encoding="utf-8") as handle:
            data = json.load(handle)
    except FileNotFoundError as e:
        raise SnapshotError(path, "file not found") from e
    except OSError as e:
        raise SnapshotError(path, f"cannot read: {e}") from e
    except UnicodeDecodeError as e:
        raise SnapshotError(path, f"encoding error: {e}") from e
    except json.JSONDecodeError as e:
        raise SnapshotError(path, f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise SnapshotError(path, f"expected JSON object, got {type(data).__name__}")
    return data


def snapshot_type_fqn(data: Mapping[str, Any]) -> str | None:
    """Type FQN declared by raw snapshot.

    Uses ``typeFqn``; falls back to ``packageName`` + ``name``.
    """
    type_fqn = data.get("typeFqn")
    if type_fqn:
        return str(type_fqn)

    name = data.get("name")
    if not name:
        return None
    package = data.get("packageName") or ""
    return f"{package}.{name}" if package else str(name)


def load_snapshot(path: Path) -> TypeAstData:
    """Load and convert one snapshot file.

    Args:
        path: Snapshot JSON file

    Returns:
        TypeAstData of the declared type

    Raises:
        SnapshotError: If file is unreadable or does not describe a type
    """
    return parse_snapshot(read_snapshot_json(path), path)


def parse_snapshot(data: Mapping[str, Any], path: Path) -> TypeAstData:
    """Convert raw snapshot mapping.

    Raises:
        SnapshotError: If mapping does not describe a valid type
    """
    type_fqn = snapshot_type_fqn(data)
    if type_fqn is None:
        raise SnapshotError(path, "no typeFqn or name")

    try:
        relative = data.get("relativePath")
        return TypeAstData(
            type_fqn=type_fqn,
            package_name=data.get("packageName") or "",
            absolute_path=Path(data.get("absolutePath") or path),
            relative_path=Path(relative) if relative else None,
            kind=_type_kind(data.get("kind")),
            methods=tuple(_method(m, type_fqn) for m in _seq(data, "methods")),
            field_names=frozenset(str(f) for f in _seq(data, "fields")),
            annotations=tuple(_annotation(a) for a in _seq(data, "annotations")),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise SnapshotError(path, f"malformed snapshot: {e}") from e


def _seq(data: Mapping[str, Any], key: str) -> Sequence[Any]:
    value = data.get(key)
    if value is None:
        return ()
    if not isinstance(value, list):
        raise TypeError(f"'{key}' must be a list, got {type(value).__name__}")
    return value


def _type_kind(raw: object) -> TypeKind:
    if raw is None:
        return TypeKind.CLASS
    text = str(raw)
    if text.isupper():
        return TypeKind(text.lower())
    # Parser writes "Class", "AbstractClass", "Interface", ...
    normalized = "".join(f"_{c.lower()}" if c.isupper() else c for c in text).lstrip("_")
    return TypeKind(normalized)


def _annotation(raw: Mapping[str, Any]) -> AnnotationInfo:
    name = raw["name"]
    return AnnotationInfo(
        name=name,
        simple_name=raw.get("simpleName") or simple_name_of(name),
        parameters=tuple((p.get("name"), str(p["value"])) for p in _seq(raw, "parameters")),
    )


def _method(raw: Mapping[str, Any], type_fqn: str) -> MethodDeclaration:
    start = int(raw.get("startLine", 0))
    return MethodDeclaration(
        name=raw["name"],
        parameter_types=tuple(str(p) for p in _seq(raw, "parameterTypes")),
        start_line=start,
        end_line=int(raw.get("endLine", start)),
        return_type=raw.get("returnType"),
        calls=tuple(_call(c, type_fqn) for c in _seq(raw, "calls")),
        fragments=tuple(_fragment(f, type_fqn) for f in _seq(raw, "fragments")),
        annotations=tuple(_annotation(a) for a in _seq(raw, "annotations")),
    )


def _call(raw: Mapping[str, Any], type_fqn: str) -> CallSiteNode:
    next_raw = raw.get("nextChainedCall")
    return CallSiteNode(
        caller=raw.get("caller") or type_fqn,
        callee=raw.get("callee") or "",
        method_name=raw.get("methodName") or "",
        line=int(raw.get("line", 0)),
        arguments=tuple(str(a) for a in _seq(raw, "arguments")),
        return_type=raw.get("returnType"),
        assigned_to=raw.get("assignedTo"),
        caller_variable=raw.get("callerVariable"),
        callee_variable=raw.get("calleeVariable"),
        callee_instance_id=raw.get("calleeInstanceId"),
        method_id=raw.get("methodId"),
        next_chained_call=_call(next_raw, type_fqn) if next_raw else None,
    )


def _fragment(raw: Mapping[str, Any], type_fqn: str) -> FragmentNode:
    start = int(raw.get("startLine", 0))
    return FragmentNode(
        kind=FragmentKind(str(raw["kind"]).upper()),
        condition=raw.get("condition") or "",
        start_line=start,
        end_line=int(raw.get("endLine", start)),
        condition_calls=tuple(_call(c, type_fqn) for c in _seq(raw, "conditionCalls")),
        content_calls=tuple(_call(c, type_fqn) for c in _seq(raw, "contentCalls")),
        alternatives=tuple(_fragment(f, type_fqn) for f in _seq(raw, "alternatives")),
        first_alternative=bool(raw.get("firstAlternative", True)),
    )
