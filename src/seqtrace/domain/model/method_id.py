"""MethodId helpers.

A MethodId is a plain string: ``typeFqn.methodName(paramType1,paramType2)``.
The owning type is everything before the last "." that precedes the first
"(". Ids without parentheses are malformed: the whole string is treated as
a type name with no method part.
"""

from __future__ import annotations

import re

_GENERICS = re.compile(r"<.*>")
_UNSAFE_ID_CHARS = re.compile(r"[()<>\[\]\s]")


def _split_point(method_id: str) -> tuple[int, int]:
    """Return (paren index, last dot before paren). Both -1 when absent."""
    paren = method_id.find("(")
    if paren == -1:
        return -1, -1
    return paren, method_id.rfind(".", 0, paren)


def type_fqn_of(method_id: str) -> str:
    """Owning type FQN of method id.

    Malformed ids (no parentheses) are returned unchanged.
    Ids with a method part but no type part return "".
    """
    paren, dot = _split_point(method_id)
    if paren == -1:
        return method_id
    if dot == -1:
        return ""
    return method_id[:dot]


def method_signature_of(method_id: str) -> str:
    """Method signature part: ``name(params)``. Empty for malformed ids."""
    paren, dot = _split_point(method_id)
    if paren == -1:
        return ""
    return method_id[dot + 1 :]


def method_name_of(method_id: str) -> str:
    """Simple method name. Empty for malformed ids."""
    signature = method_signature_of(method_id)
    return signature.split("(", 1)[0]


def parameter_types_of(method_id: str) -> tuple[str, ...]:
    """Parameter types of method id, split on top-level commas.

    Commas inside generic arguments (``Map<K,V>``) do not split.
    """
    paren = method_id.find("(")
    close = method_id.rfind(")")
    if paren == -1 or close <= paren:
        return ()

    inner = method_id[paren + 1 : close]
    params: list[str] = []
    depth = 0
    current: list[str] = []
    for char in inner:
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
        if char == "," and depth == 0:
            params.append("".join(current).strip())
            current = []
            continue
        current.append(char)

    last = "".join(current).strip()
    if last or params:
        params.append(last)
    return tuple(params)


def make_method_id(type_fqn: str, method_name: str, parameter_types: tuple[str, ...] = ()) -> str:
    """Build method id from parts."""
    return f"{type_fqn}.{method_name}({','.join(parameter_types)})"


def strip_generics(type_fqn: str) -> str:
    """Remove generic arguments: ``pkg.Box<pkg.Item>`` -> ``pkg.Box``."""
    return _GENERICS.sub("", type_fqn)


def simple_name_of(fqn: str) -> str:
    """Last dotted segment with generics removed."""
    return strip_generics(fqn).rsplit(".", 1)[-1]


def participant_id_of(type_fqn: str) -> str:
    """Diagram-safe participant identifier for type FQN."""
    safe = type_fqn.replace(".", "_").replace(",", "__")
    return _UNSAFE_ID_CHARS.sub("", safe)


def in_scope(method_id: str, base_packages: frozenset[str]) -> bool:
    """Check if method id starts with any scope prefix. Empty scope = False."""
    return any(method_id.startswith(prefix) for prefix in base_packages)
