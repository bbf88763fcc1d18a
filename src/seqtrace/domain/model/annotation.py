"""Annotation value object."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AnnotationInfo:
    """Annotation attached to a type or method declaration.

    Attributes:
        name: Fully qualified annotation name (e.g., "org.example.Service")
        simple_name: Short name used for display (e.g., "Service")
        parameters: Ordered (name, value) pairs. Name is None for the
            single unnamed value form.
    """

    name: str
    simple_name: str
    parameters: tuple[tuple[str | None, str], ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("name must not be empty")
        if not self.simple_name:
            raise ValueError("simple_name must not be empty")

    def __str__(self) -> str:
        """Format as source-like ``@Name(k=v, ...)``."""
        if not self.parameters:
            return f"@{self.simple_name}"
        args = ", ".join(value if key is None else f"{key}={value}" for key, value in self.parameters)
        return f"@{self.simple_name}({args})"
