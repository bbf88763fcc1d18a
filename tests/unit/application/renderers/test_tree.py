"""Tests for application/renderers/tree.py."""

from seqtrace.application.renderers.tree import TreeRenderer
from seqtrace.domain.model.diagram_node import ControlFlowFragment
from seqtrace.domain.model.enums import FragmentKind
from seqtrace.domain.model.trace_result import TraceResult
from seqtrace.infrastructure.filters.default import DefaultTraceFilter
from tests.factories import make_config, make_interaction

ENTRY = "pkg.A.foo()"


def _render(*nodes, **config) -> str:
    return TreeRenderer().render(TraceResult(ENTRY, nodes), make_config(**config))


class TestTreeRenderer:
    """Plain tree output."""

    def test_format_name(self) -> None:
        """Format name."""
        assert TreeRenderer().format_name == "Tree"

    def test_root_and_children(self) -> None:
        """Entry at the root, calls nested under their caller."""
        baz = make_interaction("pkg.C", "baz", 20, caller="pkg.B")
        text = _render(make_interaction("pkg.B", "bar", 10, internal_calls=(baz,)))

        lines = text.splitlines()
        assert lines[0].strip() == ENTRY
        assert "B.bar()  (line 10)" in lines[1]
        assert "C.baz()  (line 20)" in lines[2]
        assert lines[2].index("C.baz") > lines[1].index("B.bar")

    def test_no_color_codes(self) -> None:
        """Output is plain text."""
        assert "\x1b[" not in _render(make_interaction("pkg.B", "bar"))

    def test_chain_link(self) -> None:
        """Chained call shown as a child of the previous link."""
        build = make_interaction("pkg.Builder", "build", 5)
        text = _render(make_interaction("pkg.Factory", "builder", 5, next_chained_call=build))

        assert "then Builder.build()  (line 5)" in text

    def test_fragments(self) -> None:
        """Frame keyword, condition calls and else branch."""
        otherwise = ControlFlowFragment(
            kind=FragmentKind.ALTERNATIVE,
            condition="",
            start_line=5,
            end_line=6,
            caller_type="pkg.A",
            caller_method="foo",
            content_interactions=(make_interaction("pkg.D", "reject", 6),),
            is_first_alternative=False,
        )
        alt = ControlFlowFragment(
            kind=FragmentKind.ALTERNATIVE,
            condition="valid",
            start_line=1,
            end_line=6,
            caller_type="pkg.A",
            caller_method="foo",
            condition_interactions=(make_interaction("pkg.B", "check", 1),),
            alternatives=(otherwise,),
        )

        text = _render(alt)

        assert "alt valid" in text
        assert "[cond] B.check()  (line 1)" in text
        assert "else" in text
        assert "D.reject()  (line 6)" in text

    def test_filter_and_hide_flags(self) -> None:
        """Render-time filter and detail flags apply."""
        inner = make_interaction("pkg.C", "inner", caller="pkg.B")
        nodes = (
            make_interaction("pkg.Log", "info", 1),
            make_interaction("pkg.B", "bar", 2, internal_calls=(inner,)),
        )

        text = _render(
            *nodes,
            hide_details_in_chain_expression=True,
            filter=DefaultTraceFilter(excluded_type_prefixes=frozenset({"pkg.Log"})),
        )

        assert "Log.info" not in text
        assert "B.bar()" in text
        assert "C.inner" not in text
