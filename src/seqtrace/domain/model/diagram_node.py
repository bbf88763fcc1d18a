"""Trace tree nodes.

DiagramNode is a closed union of Interaction and ControlFlowFragment.
Every consumer dispatches with an exhaustive ``match``.
Nodes are created fresh per trace and never mutated: a node is built once
its internal calls and chain continuation are known.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from seqtrace.domain.model.enums import FragmentKind
from seqtrace.domain.model.method_id import make_method_id


@dataclass(frozen=True, slots=True)
class Interaction:
    """One call edge of the trace.

    Attributes:
        caller: Type FQN of the calling type
        callee: Type FQN of the receiver
        method_name: Invoked method name
        line: Source line of the call
        arguments: Argument expression texts
        return_type: Return type FQN, None if unknown
        assigned_to: Variable receiving the result, if any
        callee_variable: Receiver variable name, if any
        callee_instance_id: Receiver instance id, if any
        next_chained_call: Next link when the following call is invoked on
            this call's result (``a.b().c()``)
        internal_calls: What happens inside the callee's body, traced one
            level deeper
    """

    caller: str
    callee: str
    method_name: str
    line: int
    arguments: tuple[str, ...] = ()
    return_type: str | None = None
    assigned_to: str | None = None
    callee_variable: str | None = None
    callee_instance_id: str | None = None
    next_chained_call: Interaction | None = None
    internal_calls: tuple[DiagramNode, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.callee is None:
            raise TypeError("callee must not be None (use empty string)")
        if not self.method_name:
            raise ValueError("method_name must not be empty")

    @property
    def start_line(self) -> int:
        """Source line used for program-order merging."""
        return self.line

    @property
    def method_id(self) -> str:
        """Name-only MethodId of the invoked method."""
        return make_method_id(self.callee, self.method_name)

    def chain(self) -> Iterator[Interaction]:
        """Yield this interaction followed by every chained continuation."""
        link: Interaction | None = self
        while link is not None:
            yield link
            link = link.next_chained_call


@dataclass(frozen=True, slots=True)
class ControlFlowFragment:
    """One structured control-flow block of the trace.

    Attributes:
        kind: ALTERNATIVE, LOOP or OPTIONAL
        condition: Condition text ("" for an unconditional else)
        start_line: First line of the block
        end_line: Last line of the block
        caller_type: Type owning the method the block lives in
        caller_method: Method the block lives in
        condition_interactions: Calls made while evaluating the condition
        content_interactions: Calls made in the block body
        alternatives: Nested blocks and else/else-if continuations
        is_first_alternative: True opens a new frame, False continues the
            enclosing ALTERNATIVE frame as an else branch
    """

    kind: FragmentKind
    condition: str
    start_line: int
    end_line: int
    caller_type: str
    caller_method: str
    condition_interactions: tuple[Interaction, ...] = ()
    content_interactions: tuple[Interaction, ...] = ()
    alternatives: tuple[ControlFlowFragment, ...] = ()
    is_first_alternative: bool = True

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.kind is None:
            raise TypeError("kind must not be None")
        if self.end_line < self.start_line:
            raise ValueError(f"end_line ({self.end_line}) must be >= start_line ({self.start_line})")

    @property
    def opens_frame(self) -> bool:
        """False only for else/else-if continuations of an ALTERNATIVE."""
        return self.kind is not FragmentKind.ALTERNATIVE or self.is_first_alternative

    @property
    def context_path(self) -> str:
        """``callerType.callerMethod`` the block belongs to."""
        return f"{self.caller_type}.{self.caller_method}"


DiagramNode = Interaction | ControlFlowFragment


def start_line_of(node: DiagramNode) -> int:
    """Source start line of any node (sort key for merging)."""
    match node:
        case Interaction():
            return node.line
        case ControlFlowFragment():
            return node.start_line


def iter_interactions(nodes: tuple[DiagramNode, ...]) -> Iterator[Interaction]:
    """Yield every interaction reachable from nodes, depth-first.

    Covers internal calls, chain continuations, fragment condition and
    content interactions and nested alternatives.
    """
    for node in nodes:
        match node:
            case Interaction():
                for link in node.chain():
                    yield link
                    yield from iter_interactions(link.internal_calls)
            case ControlFlowFragment():
                yield from iter_interactions(node.condition_interactions)
                yield from iter_interactions(node.content_interactions)
                yield from iter_interactions(node.alternatives)
