"""Unit tests for propdoc_core.scanners.property_scanner module."""

import pytest

from propdoc_core.scanners.property_scanner import PropertyScanner, ScannerContext


def parse(body, **kwargs):
    return PropertyScanner(body, **kwargs).parse()


def types(body, **kwargs):
    return {name: decl.type_text for name, decl in parse(body, **kwargs).items()}


class TestScannerContext:
    """Tests for ScannerContext enum."""

    def test_eight_states(self):
        assert len(ScannerContext) == 8

    def test_string_enum_behavior(self):
        assert ScannerContext.SEEKING == "seeking"


class TestBasicProperties:
    """Tests for simple declarations."""

    def test_required_and_optional(self):
        result = parse(" a: string; b?: number; ")

        assert list(result) == ["a", "b"]
        assert result["a"].type_text == "string"
        assert result["a"].required is True
        assert result["b"].type_text == "number"
        assert result["b"].required is False

    @pytest.mark.parametrize(
        "body",
        [
            "a: string; b: number; c: boolean;",
            "a: string; b: number; c: boolean",
            "\n  a: string\n  b: number\n  c: boolean\n",
        ],
    )
    def test_property_count_with_or_without_semicolons(self, body):
        assert list(parse(body)) == ["a", "b", "c"]

    def test_missing_semicolon_before_optional(self):
        assert types("\n  a: string\n  b?: number\n") == {"a": "string", "b": "number"}

    def test_empty_body(self):
        assert parse("") == {}
        assert parse("   \n  ") == {}

    def test_duplicate_last_wins(self):
        assert types("a: string; a: number") == {"a": "number"}

    def test_readonly_modifier_dropped(self):
        result = parse("readonly id: string;")

        assert list(result) == ["id"]

    def test_space_before_optional_marker(self):
        result = parse("a ?: string")

        assert result["a"].optional is True


class TestComplexTypes:
    """Tests for nested and multi-line types."""

    def test_nested_object(self):
        assert types("a: { b: string; c: number }; d: boolean") == {
            "a": "{ b: string; c: number }",
            "d": "boolean",
        }

    def test_function_type(self):
        assert types("onClick: (e: MouseEvent) => void;") == {"onClick": "(e: MouseEvent) => void"}

    def test_generic_and_array(self):
        assert types("items: Array<{ id: number }>; tags: string[]") == {
            "items": "Array<{ id: number }>",
            "tags": "string[]",
        }

    def test_multiline_union(self):
        assert types("a: 'x'\n    | 'y'\n  b: string") == {"a": "'x' | 'y'", "b": "string"}

    def test_conditional_type(self):
        assert types("a: T extends string ? X : Y; b: number") == {
            "a": "T extends string ? X : Y",
            "b": "number",
        }

    def test_string_literal_with_comment_and_brace(self):
        assert types("kind: '//x' | \"}\"; b: number") == {"kind": "'//x' | \"}\"", "b": "number"}

    def test_multiline_type_kept_when_not_normalised(self):
        body = "a: {\n      b: string;\n    };"

        assert types(body, normalise_type=False) == {"a": "{\n  b: string;\n}"}

    def test_nested_comment_kept_verbatim(self):
        body = "a: {\n  // inner\n  b: string\n};"

        assert types(body, normalise_type=False) == {"a": "{\n  // inner\n  b: string\n}"}


class TestSkippedMembers:
    """Tests for members that are not named properties."""

    def test_index_signature_skipped(self):
        assert types("[key: string]: unknown; a: string") == {"a": "string"}

    def test_method_signature_skipped(self):
        assert types("focus(): void; a: string") == {"a": "string"}

    def test_quoted_name_skipped(self):
        assert types("'data-id': string; a: number") == {"a": "number"}

    def test_empty_type_discarded(self):
        assert parse("a: ; b: string").keys() == {"b"}

    def test_stray_closer_ends_property(self):
        assert types("a: string } b: number") == {"a": "string", "b": "number"}


class TestComments:
    """Tests for comment handling."""

    def test_doc_comment_attaches_to_next_property_only(self):
        result = parse("\n  /** The label */\n  label: string;\n  size?: number;\n")

        assert result["label"].comment == "The label"
        assert result["size"].comment is None

    def test_line_and_block_comments_ignored(self):
        result = parse("// a: number;\n/* b: string; */\nc: boolean")

        assert list(result) == ["c"]
        assert result["c"].comment is None

    def test_trailing_line_comment_ends_property(self):
        assert types("a: string // trailing\nb: number") == {"a": "string", "b": "number"}

    def test_empty_block_comment_is_not_doc_comment(self):
        result = parse("/**/ a: string")

        assert result["a"].comment is None

    def test_doc_comment_of_discarded_property_cleared(self):
        result = parse("/** doc */ a: ; b: string")

        assert list(result) == ["b"]
        assert result["b"].comment is None

    def test_comment_normalised(self):
        body = "/**\n * Line one\n * Line two\n */\na: string"

        assert parse(body, normalise_comment=True)["a"].comment == "Line one Line two"

    def test_comment_lines_kept(self):
        body = "/**\n     * Line one\n     * Line two\n     */\na: string"

        assert parse(body)["a"].comment == "\n * Line one\n * Line two\n"

    def test_quote_in_comment_is_inert(self):
        assert types("// don't\na: string") == {"a": "string"}
