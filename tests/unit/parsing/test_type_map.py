"""Unit tests for propdoc_core.parsing.type_map module."""

import pytest

from propdoc_core.parsing.type_map import build_type_map, parse_parent_types


def entry_types(definition):
    return {name: decl.type_text for name, decl in definition.entries.items()}


class TestBuildTypeMap:
    """Tests for build_type_map()."""

    def test_type_alias(self):
        type_map = build_type_map(["type Props = { a: string; b?: number };"])

        assert list(type_map) == ["Props"]
        assert entry_types(type_map["Props"]) == {"a": "string", "b": "number"}
        assert type_map["Props"].entries["a"].required is True
        assert type_map["Props"].entries["b"].required is False
        assert type_map["Props"].inherits == []

    @pytest.mark.parametrize(
        "source",
        [
            "interface Props extends Parent { x: number }",
            "type Props = Parent & { x: number };",
        ],
    )
    def test_single_parent(self, source):
        definition = build_type_map([source])["Props"]

        assert definition.inherits == ["Parent"]
        assert entry_types(definition) == {"x": "number"}
        assert definition.entries["x"].required is True

    @pytest.mark.parametrize(
        "source",
        [
            "interface P extends A, B<C, D> { x: number }",
            "type P = A & B<C, D> & { x: number };",
        ],
    )
    def test_generic_parents(self, source):
        assert build_type_map([source])["P"].inherits == ["A", "B<C, D>"]

    def test_export_and_generic_name(self):
        type_map = build_type_map(["export type P<T extends object = {}> = { value: T };"])

        assert entry_types(type_map["P"]) == {"value": "T"}

    def test_interface_generic_name(self):
        type_map = build_type_map(["interface Box<T> { value: T }"])

        assert entry_types(type_map["Box"]) == {"value": "T"}

    def test_non_object_aliases_skipped(self):
        source = "type Alias = string;\ntype Fn = (a: { b: 1 }) => void;\ntype L = Array<{ a: 1 }>;"

        assert build_type_map([source]) == {}

    @pytest.mark.parametrize(
        "source",
        [
            "type Fn = () => { a: string };",
            "type Fn = (x: number) => { a: string }",
            "type Make = <T>(value: T) => { value: T };",
        ],
    )
    def test_function_returning_object_skipped(self, source):
        assert build_type_map([source]) == {}

    def test_arrow_inside_generic_argument_keeps_object(self):
        source = "type P = Handler<() => void> & { a: string };"

        definition = build_type_map([source])["P"]

        assert definition.inherits == ["Handler<() => void>"]
        assert entry_types(definition) == {"a": "string"}

    def test_alias_without_semicolon_stops_at_next_statement(self):
        source = "type U = 'a' | 'b'\ninterface X { a: number }"

        assert list(build_type_map([source])) == ["X"]

    def test_keywords_in_comments_and_strings_ignored(self):
        source = "// type Fake = { a: string }\nconst s = 'interface Nope { b: 1 }';"

        assert build_type_map([source]) == {}

    def test_type_only_import_ignored(self):
        source = "import type { Snippet } from 'svelte';\nimport { type Foo } from './foo';"

        assert build_type_map([source]) == {}

    def test_later_declaration_wins(self):
        type_map = build_type_map(["type P = { a: string };", "type P = { b: number };"])

        assert entry_types(type_map["P"]) == {"b": "number"}

    def test_empty_literal_dropped(self):
        definition = build_type_map(["type P = Base & {} & { a: string };"])["P"]

        assert definition.inherits == ["Base"]
        assert entry_types(definition) == {"a": "string"}

    def test_parent_after_body(self):
        definition = build_type_map(["type P = { a: string } & Base;"])["P"]

        assert definition.inherits == ["Base"]
        assert entry_types(definition) == {"a": "string"}

    def test_empty_type(self):
        definition = build_type_map(["type P = {};"])["P"]

        assert definition.entries == {}
        assert definition.inherits == []

    def test_doc_comments_collected(self):
        source = "interface P {\n  /** Shown text */\n  label: string;\n}"

        assert build_type_map([source])["P"].entries["label"].comment == "Shown text"

    def test_normalise_flags_forwarded(self):
        source = "type P = {\n  /**\n   * One\n   * Two\n   */\n  a: {\n    b: 1\n  };\n};"

        definition = build_type_map([source], normalise_comment=True, normalise_type=False)["P"]

        assert definition.entries["a"].comment == "One Two"
        assert definition.entries["a"].type_text == "{\n  b: 1\n}"

    def test_unterminated_body(self):
        definition = build_type_map(["interface P { a: string; b: number"])["P"]

        assert entry_types(definition) == {"a": "string", "b": "number"}


class TestParseParentTypes:
    """Tests for parse_parent_types()."""

    def test_deduplicated(self):
        assert parse_parent_types("A, B, A", ",") == ["A", "B"]

    def test_comments_removed(self):
        assert parse_parent_types("A /* base */ & B // tail", "&") == ["A", "B"]

    def test_empty_literal_dropped(self):
        assert parse_parent_types("{} & A", "&") == ["A"]
