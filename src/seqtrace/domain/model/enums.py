"""Domain enumerations."""

from enum import Enum


class FragmentKind(Enum):
    """Control-flow block kind, maps to sequence-diagram combined fragments."""

    ALTERNATIVE = "ALTERNATIVE"  # if / else-if / else
    LOOP = "LOOP"  # for / while / for-each
    OPTIONAL = "OPTIONAL"  # single-branch if


class TypeKind(Enum):
    """Declared kind of an indexed type."""

    CLASS = "class"
    ABSTRACT_CLASS = "abstract_class"
    INTERFACE = "interface"
    ENUM = "enum"
    RECORD = "record"
