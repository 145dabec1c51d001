"""Unit tests for the plain renderer and the line-buffering rules."""

import pytest

from codeloom.compiler import compile_template
from codeloom.config import RenderConfig
from codeloom.exceptions import MalformedBackReferenceError
from codeloom.models import (
    NEWLINE,
    BackReference,
    Document,
    FixedText,
    NestedBlock,
    ProvenanceMarker,
    ProvenanceToken,
)
from codeloom.renderers import PlainRenderer, render, resolve_back_reference


def compile_text(template: str, **arguments: object) -> Document:
    return compile_template(template, arguments=arguments)


class TestBlankLines:
    """Tests for blank-line collapsing."""

    def test_leading_blank_lines_dropped(self) -> None:
        """Test that output never starts with blank lines."""
        assert render(compile_text("\n\n\nint x;")) == "int x;"

    def test_runs_collapse_to_one_blank_line(self) -> None:
        """Test that any run of blank lines becomes a single blank line."""
        assert render(compile_text("a\n\n\n\nb")) == "a\n\nb"

    def test_single_blank_line_kept(self) -> None:
        """Test that one blank line between content lines survives."""
        assert render(compile_text("a\n\nb")) == "a\n\nb"

    def test_no_blank_line_after_opening_bracket(self) -> None:
        """Test that blank lines after a line ending in { are dropped."""
        doc = compile_text("f() {\n\n\n    x;\n}")

        assert render(doc) == "f() {\n    x;\n}"

    def test_no_blank_line_before_closing_bracket(self) -> None:
        """Test that blank lines before a line starting with } are dropped."""
        assert render(compile_text("x;\n\n\n}")) == "x;\n}"

    def test_parentheses_and_square_brackets(self) -> None:
        """Test that ( [ ) ] follow the same rules as braces."""
        assert render(compile_text("call(\n\n  x\n\n)")) == "call(\n  x\n)"
        assert render(compile_text("[\n\n  1,\n\n]")) == "[\n  1,\n]"

    def test_whitespace_only_lines_not_written(self) -> None:
        """Test that a line holding only spaces is never emitted."""
        doc = Document([FixedText("   "), NEWLINE, FixedText("a")])

        assert render(doc) == "a"

    def test_empty_substitution_line(self) -> None:
        """Test that a line emptied by substitution counts as blank."""
        assert render(compile_text("a\n$empty\nb", empty="")) == "a\n\nb"

    def test_only_blank_lines(self) -> None:
        """Test that a Document of blank lines renders to nothing."""
        assert render(compile_text("\n\n\n")) == ""

    def test_custom_cap(self) -> None:
        """Test that max_newlines raises the number of kept blank lines."""
        config = RenderConfig(max_newlines=3)

        assert render(compile_text("a\n\n\n\n\nb"), config) == "a\n\n\nb"


class TestTrailingNewline:
    """Tests for the final line break."""

    def test_trailing_newline_kept(self) -> None:
        """Test that a Document ending with a line break keeps one."""
        assert render(compile_text("a\n\n\n")) == "a\n"

    def test_no_trailing_newline_added(self) -> None:
        """Test that no line break is added when the Document has none."""
        assert render(compile_text("a")) == "a"

    def test_trailing_newline_disabled(self) -> None:
        """Test that trailing_newline=False drops the final line break."""
        config = RenderConfig(trailing_newline=False)

        assert render(compile_text("a\n"), config) == "a"


class TestIndentation:
    """Tests for nested block alignment."""

    def test_nested_lines_aligned(self) -> None:
        """Test that every line of a nested value starts at its column."""
        doc = compile_text("{\n    $body\n}", body="a\nb")

        assert render(doc) == "{\n    a\n    b\n}"

    def test_mid_line_alignment(self) -> None:
        """Test that nested lines align under the insertion point."""
        doc = compile_text("x = $v;", v="1\n2")

        assert render(doc) == "x = 1\n    2;"

    def test_nested_blank_lines_have_no_padding(self) -> None:
        """Test that blank lines inside a nested block carry no indentation."""
        doc = compile_text("{\n    $body\n}", body="a\n\nb")

        assert render(doc) == "{\n    a\n\n    b\n}"

    def test_deep_nesting(self) -> None:
        """Test that indentation accumulates through nesting levels."""
        inner = compile_text("if (y) {\n    $stmt\n}", stmt="z();")
        outer = compile_text("if (x) {\n    $inner\n}", inner=inner)

        assert render(outer) == (
            "if (x) {\n"
            "    if (y) {\n"
            "        z();\n"
            "    }\n"
            "}"
        )


class TestBackReferences:
    """Tests for rendering repeated substitutions."""

    def test_repeated_greeting(self) -> None:
        """Test that every use of one argument renders the same text."""
        assert render(compile_text("$x, $x!", x="hi")) == "hi, hi!"

    def test_repeated_value_rendered_each_time(self) -> None:
        """Test that a back-reference renders the referenced block again."""
        assert render(compile_text("$a + $a = $b", a="x", b=2)) == "x + x = 2"

    def test_repeated_value_aligned_at_each_use(self) -> None:
        """Test that each use of a multi-line value aligns at its own column."""
        doc = compile_text("$v\n  $v", v="1\n2")

        assert render(doc) == "1\n2\n  1\n  2"

    def test_offset_before_sequence_start(self) -> None:
        """Test that an offset reaching before the sequence is rejected."""
        with pytest.raises(MalformedBackReferenceError):
            render(Document([BackReference(1)]))

    def test_zero_offset(self) -> None:
        """Test that a back-reference cannot point at itself."""
        with pytest.raises(MalformedBackReferenceError):
            render(Document([FixedText("a"), BackReference(0)]))

    def test_target_not_nested_block(self) -> None:
        """Test that a back-reference must land on a NestedBlock."""
        with pytest.raises(MalformedBackReferenceError, match="FixedText"):
            render(Document([FixedText("a"), BackReference(1)]))

    def test_resolve_back_reference(self) -> None:
        """Test direct resolution of a well-formed reference."""
        block = NestedBlock((FixedText("x"),))
        ops = [block, FixedText(" "), BackReference(2)]

        assert resolve_back_reference(ops, 2, ops[2]) is block

    def test_reference_does_not_cross_levels(self) -> None:
        """Test that offsets count within the nested sequence only."""
        block = NestedBlock((FixedText("x"),))
        nested = NestedBlock((FixedText("y"), BackReference(2)))

        with pytest.raises(MalformedBackReferenceError):
            render(Document([block, nested]))


class TestPlainRenderer:
    """Tests for PlainRenderer behaviour."""

    def test_provenance_markers_ignored(self, token_a: ProvenanceToken) -> None:
        """Test that plain output contains no provenance information."""
        doc = Document([ProvenanceMarker(token_a), FixedText("a")])

        assert render(doc) == "a"

    def test_render_is_repeatable(self) -> None:
        """Test that rendering does not change the Document."""
        doc = compile_text("{\n    $v\n}\n", v="a\nb")
        renderer = PlainRenderer()

        first = renderer.render(doc)
        second = renderer.render(doc)

        assert first == second == "{\n    a\n    b\n}\n"
