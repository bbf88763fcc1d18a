"""Tests for domain/model/diagram_node.py and trace_result.py."""

import pytest

from seqtrace.domain.model.diagram_node import (
    ControlFlowFragment,
    Interaction,
    iter_interactions,
    start_line_of,
)
from seqtrace.domain.model.enums import FragmentKind
from seqtrace.domain.model.trace_result import TraceResult
from tests.factories import make_interaction


def _fragment(**kwargs) -> ControlFlowFragment:
    defaults = {
        "kind": FragmentKind.ALTERNATIVE,
        "condition": "x > 0",
        "start_line": 10,
        "end_line": 20,
        "caller_type": "pkg.A",
        "caller_method": "foo",
    }
    defaults.update(kwargs)
    return ControlFlowFragment(**defaults)


class TestInteraction:
    """Tests for Interaction."""

    def test_requires_method_name(self) -> None:
        """Empty method name rejected."""
        with pytest.raises(ValueError, match="method_name"):
            Interaction(caller="pkg.A", callee="pkg.B", method_name="", line=1)

    def test_method_id(self) -> None:
        """method_id is the name-only id on the callee."""
        assert make_interaction("pkg.B", "bar").method_id == "pkg.B.bar()"

    def test_chain(self) -> None:
        """chain yields self followed by continuations."""
        tail = make_interaction("pkg.C", "build", 3)
        head = make_interaction("pkg.B", "builder", 3, next_chained_call=tail)

        assert list(head.chain()) == [head, tail]


class TestControlFlowFragment:
    """Tests for ControlFlowFragment."""

    def test_first_alternative_opens_frame(self) -> None:
        """First ALTERNATIVE opens a frame."""
        assert _fragment().opens_frame is True

    def test_continuation_does_not_open_frame(self) -> None:
        """Else branch continues the enclosing frame."""
        assert _fragment(is_first_alternative=False).opens_frame is False

    def test_loop_always_opens_frame(self) -> None:
        """Non-ALTERNATIVE kinds always open a frame."""
        assert _fragment(kind=FragmentKind.LOOP, is_first_alternative=False).opens_frame is True

    def test_context_path(self) -> None:
        """context_path names the owning method."""
        assert _fragment(kind=FragmentKind.LOOP, condition="i < n").context_path == "pkg.A.foo"

    def test_line_range_validated(self) -> None:
        """end_line before start_line rejected."""
        with pytest.raises(ValueError, match="end_line"):
            _fragment(start_line=5, end_line=4)


class TestTreeWalk:
    """Tests for start_line_of and iter_interactions."""

    def test_start_line_of(self) -> None:
        """Both node kinds expose their first line."""
        assert start_line_of(make_interaction("pkg.B", "bar", 7)) == 7
        assert start_line_of(_fragment(start_line=12, end_line=14)) == 12

    def test_iter_interactions_reaches_everything(self) -> None:
        """Internal calls, chain links and fragment contents are visited."""
        deep = make_interaction("pkg.D", "deep", 2)
        tail = make_interaction("pkg.C", "tail", 3)
        head = make_interaction("pkg.B", "head", 3, internal_calls=(deep,), next_chained_call=tail)
        cond = make_interaction("pkg.E", "check", 10)
        body = make_interaction("pkg.F", "work", 11)
        fragment = _fragment(condition_interactions=(cond,), content_interactions=(body,))

        names = [i.method_name for i in iter_interactions((head, fragment))]

        assert names == ["head", "deep", "tail", "check", "work"]


class TestTraceResult:
    """Tests for TraceResult."""

    def test_requires_entry(self) -> None:
        """Empty entry method id rejected."""
        with pytest.raises(ValueError, match="entry_method_id"):
            TraceResult(entry_method_id="", nodes=())

    def test_empty(self) -> None:
        """empty() has no nodes."""
        result = TraceResult.empty("pkg.A.foo()")

        assert result.is_empty is True
        assert result.node_count == 0
        assert result.entry_type == "pkg.A"

    def test_counts(self) -> None:
        """node_count includes fragments, interaction_count does not."""
        inner = make_interaction("pkg.C", "baz", 5)
        call = make_interaction("pkg.B", "bar", 3, internal_calls=(inner,))
        fragment = _fragment(content_interactions=(make_interaction("pkg.D", "qux", 11),))
        result = TraceResult(entry_method_id="pkg.A.foo()", nodes=(call, fragment))

        assert result.node_count == 4
        assert result.interaction_count == 3

    def test_involved_types_and_methods(self) -> None:
        """Entry plus every callee, generics stripped."""
        call = make_interaction("pkg.Box<pkg.Item>", "get", 3)
        result = TraceResult(entry_method_id="pkg.A.foo(int)", nodes=(call,))

        assert result.involved_types() == frozenset({"pkg.A", "pkg.Box"})
        assert result.involved_method_ids() == frozenset({"pkg.A.foo(int)", "pkg.Box<pkg.Item>.get()"})
