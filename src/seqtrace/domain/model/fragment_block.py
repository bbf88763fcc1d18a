"""Control-flow block node from a type snapshot."""

from __future__ import annotations

from dataclasses import dataclass

from seqtrace.domain.model.call_site import CallSiteNode
from seqtrace.domain.model.enums import FragmentKind


@dataclass(frozen=True, slots=True)
class FragmentNode:
    """Structured control-flow block inside a method body.

    Attributes:
        kind: ALTERNATIVE, LOOP or OPTIONAL
        condition: Condition text ("" for an unconditional else)
        start_line: First line of the block
        end_line: Last line of the block
        condition_calls: Calls made while evaluating the condition
        content_calls: Calls made directly in the block body
        alternatives: Nested blocks and else/else-if continuations
        first_alternative: True opens a new frame, False continues the
            enclosing ALTERNATIVE frame as an else branch
    """

    kind: FragmentKind
    condition: str
    start_line: int
    end_line: int
    condition_calls: tuple[CallSiteNode, ...] = ()
    content_calls: tuple[CallSiteNode, ...] = ()
    alternatives: tuple[FragmentNode, ...] = ()
    first_alternative: bool = True

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.kind is None:
            raise TypeError("kind must not be None")
        if self.condition is None:
            raise TypeError("condition must not be None (use empty string)")
        if self.end_line < self.start_line:
            raise ValueError(f"end_line ({self.end_line}) must be >= start_line ({self.start_line})")

    def encloses(self, other: FragmentNode) -> bool:
        """Check if other block lies within this block's line range."""
        return (
            other is not self
            and self.start_line <= other.start_line
            and other.end_line <= self.end_line
            and (self.start_line, self.end_line) != (other.start_line, other.end_line)
        )
