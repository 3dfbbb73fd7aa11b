"""Error-path and malformed input tests.

Rendering never raises for bad trees: unknown types, missing input and
malformed attributes degrade to empty output plus a Diagnostic.
"""

import logging

import pytest

from richblok import render
from richblok.config import RenderConfig
from richblok.diagnostics import Diagnostic, DiagnosticCode, collect_diagnostics
from richblok.errors import RenderError, RichblokError, SchemaError
from richblok.nodes import Bold, Heading, Paragraph, Text, UnknownMark, UnknownNode
from richblok.renderers.html import HtmlRenderer
from richblok.serialization import from_json

# =========================================================================
# Exception hierarchy
# =========================================================================


class TestErrors:
    """Verify exception formatting and hierarchy."""

    def test_schema_error_with_type(self) -> None:
        err = SchemaError("Unknown node type", type_name="blink")
        assert str(err) == "'blink': Unknown node type"
        assert err.type_name == "blink"

    def test_schema_error_without_type(self) -> None:
        err = SchemaError("bad")
        assert str(err) == "bad"
        assert err.type_name is None

    def test_hierarchy(self) -> None:
        assert isinstance(SchemaError("x"), RichblokError)
        assert isinstance(RenderError("x"), RichblokError)


# =========================================================================
# Missing and invalid input
# =========================================================================


class TestMissingInput:
    """None and non-node values render as empty strings."""

    def test_render_none(self) -> None:
        with collect_diagnostics() as found:
            assert render(None) == ""
        assert [d.code for d in found] == [DiagnosticCode.MISSING_INPUT]

    def test_render_none_without_sink(self) -> None:
        assert render(None) == ""

    def test_none_inside_sequence(self) -> None:
        with collect_diagnostics() as found:
            html = render([Text("a"), None, Text("b")])
        assert html == "ab"
        assert [d.code for d in found] == [DiagnosticCode.MISSING_INPUT]

    @pytest.mark.parametrize("value", [42, 3.5, object(), "<p>raw</p>", b"bytes"])
    def test_invalid_values(self, value: object) -> None:
        with collect_diagnostics() as found:
            assert render(value) == ""  # type: ignore[arg-type]
        assert [d.code for d in found] == [DiagnosticCode.INVALID_INPUT]

    def test_non_mapping_child_is_skipped(self) -> None:
        with collect_diagnostics() as found:
            html = render(
                {"type": "paragraph", "content": ["oops", {"type": "text", "text": "ok"}]},
            )
        assert html == "<p >ok</p>"
        assert found[0].code == DiagnosticCode.INVALID_INPUT


# =========================================================================
# Unknown node types
# =========================================================================


class TestUnknownNodes:
    """Unknown types contribute an empty string; siblings still render."""

    def test_unknown_top_level(self) -> None:
        with collect_diagnostics() as found:
            assert render({"type": "blink", "text": "x"}) == ""
        assert found == [
            Diagnostic(
                DiagnosticCode.UNKNOWN_NODE,
                "No resolver found for node type 'blink'",
                node_type="blink",
            )
        ]

    def test_unknown_sibling_does_not_stop_rendering(self) -> None:
        doc = {
            "type": "doc",
            "content": [
                {"type": "paragraph", "content": [{"type": "text", "text": "before"}]},
                {"type": "embed", "attrs": {"src": "x"}, "content": [{"type": "text", "text": "gone"}]},
                {"type": "paragraph", "content": [{"type": "text", "text": "after"}]},
            ],
        }
        assert render(doc) == "<div ><p >before</p><p >after</p></div>"

    def test_unknown_nested_inside_known(self) -> None:
        para = Paragraph(content=(Text("a"), UnknownNode(type_name="emoji"), Text("b")))
        assert render(para) == "<p >ab</p>"

    def test_missing_type(self) -> None:
        with collect_diagnostics() as found:
            assert render({"content": []}) == ""
        assert found[0].code == DiagnosticCode.UNKNOWN_NODE

    def test_mark_type_used_as_node(self) -> None:
        with collect_diagnostics() as found:
            assert render({"type": "bold", "text": "x"}) == ""
        assert found[0].node_type == "bold"

    def test_untyped_node_subclass(self) -> None:
        from richblok.nodes import Block

        with collect_diagnostics() as found:
            assert render(Block(content=(Text("x"),))) == ""
        assert found[0].code == DiagnosticCode.UNKNOWN_NODE
        assert found[0].node_type == "Block"


# =========================================================================
# Unknown marks
# =========================================================================


class TestUnknownMarks:
    """An unknown mark renders empty; later marks wrap the empty string."""

    def test_unknown_mark_drops_text(self) -> None:
        with collect_diagnostics() as found:
            html = render(Text("x", marks=(UnknownMark(type_name="sparkle"), Bold())))
        assert html == "<strong ></strong>"
        assert [d.code for d in found] == [DiagnosticCode.UNKNOWN_MARK]
        assert found[0].node_type == "sparkle"

    def test_raw_unknown_mark_before_known(self) -> None:
        html = render(
            {"type": "text", "text": "x", "marks": [{"type": "sparkle"}, {"type": "bold"}]}
        )
        assert html == "<strong ></strong>"

    def test_unknown_mark_after_known(self) -> None:
        html = render(Text("x", marks=(Bold(), UnknownMark(type_name="sparkle"))))
        assert html == ""

    def test_raw_unknown_mark(self) -> None:
        html = render({"type": "text", "text": "a<b", "marks": [{"type": "textStyle"}]})
        assert html == ""

    def test_siblings_unaffected(self) -> None:
        para = Paragraph(content=(Text("a"), Text("b", marks=(UnknownMark(type_name="s"),))))
        assert render(para) == "<p >a</p>"

    def test_non_mapping_mark_is_skipped(self) -> None:
        with collect_diagnostics() as found:
            html = render(
                {"type": "text", "text": "x", "marks": ["bold", {"type": "italic"}]},
            )
        assert html == "<em >x</em>"
        assert found[0].code == DiagnosticCode.INVALID_INPUT


# =========================================================================
# Malformed attributes
# =========================================================================


class TestMalformedAttrs:
    """Best-effort handling of missing or invalid attributes."""

    def test_heading_without_level(self) -> None:
        with collect_diagnostics() as found:
            html = render({"type": "heading", "content": [{"type": "text", "text": "T"}]})
        assert html == "<h1 >T</h1>"
        assert found[0].code == DiagnosticCode.INVALID_HEADING_LEVEL

    @pytest.mark.parametrize(("raw", "expected"), [(0, 1), (9, 6), (-3, 1), ("two", 1)])
    def test_heading_level_clamped(self, raw: object, expected: int) -> None:
        with collect_diagnostics() as found:
            html = render({"type": "heading", "attrs": {"level": raw}})
        assert html.startswith(f"<h{expected} ")
        assert html.endswith(f"</h{expected}>")
        assert found[0].code == DiagnosticCode.INVALID_HEADING_LEVEL

    def test_heading_level_as_string(self) -> None:
        assert render({"type": "heading", "attrs": {"level": "4"}}) == '<h4 level="4"></h4>'

    def test_link_without_href(self) -> None:
        html = render({"type": "text", "text": "x", "marks": [{"type": "link", "attrs": {"linktype": "url"}}]})
        assert html == '<a linktype="url" href="">x</a>'

    def test_null_attr_value(self) -> None:
        assert render({"type": "paragraph", "attrs": {"class": None}}) == '<p class=""></p>'

    def test_text_without_text_field(self) -> None:
        assert render({"type": "text"}) == ""

    def test_non_string_text(self) -> None:
        assert render({"type": "text", "text": 42}) == "42"

    @pytest.mark.parametrize("attrs", ["abc", 5, ["x"], [("a", 1, 2)], True])
    def test_non_mapping_node_attrs_ignored(self, attrs: object) -> None:
        with collect_diagnostics() as found:
            html = render({"type": "paragraph", "attrs": attrs})
        assert html == "<p ></p>"
        assert found[0].code == DiagnosticCode.INVALID_INPUT

    def test_non_mapping_mark_attrs_ignored(self) -> None:
        with collect_diagnostics() as found:
            html = render({"type": "text", "text": "x", "marks": [{"type": "bold", "attrs": "zz"}]})
        assert html == "<strong >x</strong>"
        assert [d.code for d in found] == [DiagnosticCode.INVALID_INPUT]

    def test_non_mapping_heading_attrs_fall_back_to_level_one(self) -> None:
        with collect_diagnostics() as found:
            html = render({"type": "heading", "attrs": "level=3"})
        assert html == "<h1 ></h1>"
        assert [d.code for d in found] == [
            DiagnosticCode.INVALID_INPUT,
            DiagnosticCode.INVALID_HEADING_LEVEL,
        ]

    @pytest.mark.parametrize("level", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_heading_level(self, level: float) -> None:
        with collect_diagnostics() as found:
            html = render({"type": "heading", "attrs": {"level": level}})
        assert html.startswith("<h1 ")
        assert found[-1].code == DiagnosticCode.INVALID_HEADING_LEVEL

    def test_infinity_from_json(self) -> None:
        node = from_json('{"type": "heading", "attrs": {"level": Infinity}}')
        assert isinstance(node, Heading)
        assert node.level == 1

    @pytest.mark.parametrize("content", [5, "text", True, {"type": "text", "text": "x"}])
    def test_non_list_content_ignored(self, content: object) -> None:
        with collect_diagnostics() as found:
            html = render({"type": "paragraph", "content": content})
        assert html == "<p ></p>"
        assert [d.code for d in found] == [DiagnosticCode.INVALID_INPUT]

    @pytest.mark.parametrize("marks", [True, 3, "bold", {"type": "bold"}])
    def test_non_list_marks_ignored(self, marks: object) -> None:
        with collect_diagnostics() as found:
            html = render({"type": "text", "text": "x", "marks": marks})
        assert html == "x"
        assert [d.code for d in found] == [DiagnosticCode.INVALID_INPUT]

    def test_tuple_content_accepted(self) -> None:
        html = render({"type": "paragraph", "content": ({"type": "text", "text": "x"},)})
        assert html == "<p >x</p>"

    def test_unserializable_nested_attr_value(self) -> None:
        html = render(Paragraph(attrs=(("data", {"tags": {"a"}}),)))
        assert html == """<p data="{"tags":"{'a'}"}"></p>"""

    @pytest.mark.parametrize(
        "node",
        [
            {"type": "paragraph", "attrs": "abc"},
            {"type": "paragraph", "content": 5},
            {"type": "text", "text": "x", "marks": True},
        ],
    )
    def test_strict_mode_raises(self, node: dict[str, object]) -> None:
        renderer = HtmlRenderer(config=RenderConfig(strict=True))
        with pytest.raises(SchemaError):
            renderer.render(node)


# =========================================================================
# Logging
# =========================================================================


class TestDiagnosticLogging:
    """Diagnostics are logged under the richblok namespace."""

    def test_unknown_node_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="richblok"):
            render({"type": "blink"})
        assert any("blink" in r.getMessage() for r in caplog.records)
        assert all(r.name.startswith("richblok") for r in caplog.records)

    def test_sink_and_log_both_receive(self, caplog: pytest.LogCaptureFixture) -> None:
        found: list[Diagnostic] = []
        with caplog.at_level(logging.WARNING, logger="richblok"):
            HtmlRenderer(on_diagnostic=found.append).render(None)
        assert len(found) == 1
        assert "No content to render" in caplog.text

    def test_diagnostic_str(self) -> None:
        diag = Diagnostic(DiagnosticCode.UNKNOWN_MARK, "nope")
        assert str(diag) == "[unknown-mark] nope"


# =========================================================================
# Collecting diagnostics
# =========================================================================


class TestCollectDiagnostics:
    """collect_diagnostics() records what is emitted inside the block."""

    def test_collects_without_explicit_sink(self) -> None:
        with collect_diagnostics() as found:
            render([None, {"type": "blink"}])
        assert [d.code for d in found] == [
            DiagnosticCode.MISSING_INPUT,
            DiagnosticCode.UNKNOWN_NODE,
        ]

    def test_explicit_sink_also_receives(self) -> None:
        sunk: list[Diagnostic] = []
        with collect_diagnostics() as found:
            render(None, on_diagnostic=sunk.append)
        assert found == sunk
        assert len(found) == 1

    def test_nothing_collected_after_block(self) -> None:
        with collect_diagnostics() as found:
            pass
        render(None)
        assert found == []

    def test_nested_blocks_collect_separately(self) -> None:
        with collect_diagnostics() as outer:
            render(None)
            with collect_diagnostics() as inner:
                render({"type": "blink"})
            render(None)
        assert [d.code for d in inner] == [DiagnosticCode.UNKNOWN_NODE]
        assert [d.code for d in outer] == [
            DiagnosticCode.MISSING_INPUT,
            DiagnosticCode.MISSING_INPUT,
        ]

    def test_loading_diagnostics_are_collected(self) -> None:
        with collect_diagnostics() as found:
            from_json('{"type": "heading", "attrs": {"level": 12}}')
        assert [d.code for d in found] == [DiagnosticCode.INVALID_HEADING_LEVEL]
