"""Call site node from a type snapshot."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from seqtrace.domain.model.method_id import make_method_id


@dataclass(frozen=True, slots=True)
class CallSiteNode:
    """One resolved method invocation inside a method body.

    Immutable snapshot data produced by the semantic parser.
    A fluent chain ``a.b().c()`` is one CallSiteNode for ``b`` whose
    next_chained_call is the CallSiteNode for ``c``.

    Attributes:
        caller: Type FQN of the enclosing type
        callee: Resolved type FQN of the call receiver ("" if unresolved)
        method_name: Invoked method name ("" if unresolved)
        line: Source line (1-based)
        arguments: Argument expression texts, in order
        return_type: Resolved return type FQN, None if unknown
        assigned_to: Variable the result is assigned to, if any
        caller_variable: Variable name of the caller instance, if any
        callee_variable: Variable name of the receiver, if any
        callee_instance_id: Instance id disambiguating repeated receivers
        method_id: Resolved full MethodId, None when the parser could not
            resolve the exact overload
        next_chained_call: Next link of a fluent chain
    """

    caller: str
    callee: str
    method_name: str
    line: int
    arguments: tuple[str, ...] = ()
    return_type: str | None = None
    assigned_to: str | None = None
    caller_variable: str | None = None
    callee_variable: str | None = None
    callee_instance_id: str | None = None
    method_id: str | None = None
    next_chained_call: CallSiteNode | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.line < 0:
            raise ValueError(f"line must be >= 0, got {self.line}")

    @property
    def is_resolved(self) -> bool:
        """Callee type and method name are both known."""
        return bool(self.callee) and bool(self.method_name)

    @property
    def target_method_id(self) -> str:
        """MethodId of the invoked method (resolved id or name-only id)."""
        if self.method_id:
            return self.method_id
        return make_method_id(self.callee, self.method_name)

    def chain_links(self) -> Iterator[CallSiteNode]:
        """Yield the chain continuations after this call, in order."""
        link = self.next_chained_call
        while link is not None:
            yield link
            link = link.next_chained_call


def chain_heads(calls: Iterable[CallSiteNode]) -> list[CallSiteNode]:
    """Calls that are not the continuation of another call's chain.

    Continuations are matched by identity: a separate call equal in value
    to a chain link is kept.
    """
    calls = list(calls)
    links = {id(link) for call in calls for link in call.chain_links()}
    return [call for call in calls if id(call) not in links]
