"""Tests for rendering a blueprint back into a concrete argument vector."""

from __future__ import annotations

import pytest

from studio_mcp.blueprint import Blueprint, FieldKind, WordKind


class TestLiteralWords:
    @pytest.mark.parametrize(
        "argv",
        [
            ["ls"],
            ["ls", "-la", "/tmp"],
            ["curl", "-H", "Content-Type: application/json", "https://example.com"],
            ["echo", "{not a marker}", "[a.b]", ""],
        ],
    )
    def test_identity_without_placeholders(self, argv):
        bp = Blueprint.from_args(argv)

        assert bp.build_command_args({}) == argv
        assert bp.build_command_args() == argv

    def test_empty_argument_vector_renders_empty_base_command(self):
        assert Blueprint.from_args([]).build_command_args({}) == [""]


class TestOptionalArray:
    def test_expands_each_value(self):
        bp = Blueprint.from_args(["echo", "hello", "[args...]"])

        assert bp.build_command_args({"args": ["world"]}) == ["echo", "hello", "world"]
        assert bp.build_command_args({"args": ["a", "b"]}) == ["echo", "hello", "a", "b"]

    def test_unbound_or_empty_vanishes(self):
        bp = Blueprint.from_args(["echo", "hello", "[args...]"])

        assert bp.build_command_args({}) == ["echo", "hello"]
        assert bp.build_command_args({"args": []}) == ["echo", "hello"]

    def test_tuple_values_are_accepted(self):
        bp = Blueprint.from_args(["git", "status", "[args...]"])

        assert bp.build_command_args({"args": ("--short", "-b")}) == ["git", "status", "--short", "-b"]

    def test_non_string_items_are_skipped(self):
        bp = Blueprint.from_args(["echo", "[args...]"])

        rendered = bp.build_command_args({"args": ["a", 1, None, {"x": 1}, "b", True]})
        assert rendered == ["echo", "a", "b"]

    def test_string_value_is_not_split(self):
        bp = Blueprint.from_args(["echo", "[args...]"])

        assert bp.build_command_args({"args": "a b"}) == ["echo"]

    def test_values_are_not_rescanned(self):
        bp = Blueprint.from_args(["echo", "[args...]"])

        assert bp.build_command_args({"args": ["{{text}}", "[x]"]}) == ["echo", "{{text}}", "[x]"]

    def test_hyphenated_name_uses_normalised_key(self):
        bp = Blueprint.from_args(["tool", "[extra-args...]"])

        assert bp.build_command_args({"extra_args": ["x"]}) == ["tool", "x"]
        assert bp.build_command_args({"extra-args": ["x"]}) == ["tool"]


class TestOptionalScalar:
    def test_bound_string_is_one_argument(self):
        bp = Blueprint.from_args(["git", "log", "[branch]"])

        assert bp.build_command_args({"branch": "main feature"}) == ["git", "log", "main feature"]

    def test_empty_string_is_treated_as_absent(self):
        bp = Blueprint.from_args(["git", "log", "[branch]"])

        assert bp.build_command_args({"branch": ""}) == ["git", "log"]
        assert bp.build_command_args({}) == ["git", "log"]

    def test_non_string_value_is_omitted(self):
        bp = Blueprint.from_args(["git", "log", "[branch]"])

        assert bp.build_command_args({"branch": ["main"]}) == ["git", "log"]
        assert bp.build_command_args({"branch": 3}) == ["git", "log"]


class TestRequiredFields:
    def test_whole_word_substitution(self):
        bp = Blueprint.from_args(["echo", "{{text#the text to echo}}"])

        assert bp.build_command_args({"text": "Hello Blueprint!"}) == ["echo", "Hello Blueprint!"]

    def test_literal_flags_pass_through(self):
        bp = Blueprint.from_args(["say", "-v", "siri", "{{speech#msg}}"])

        assert bp.build_command_args({"speech": "hi"}) == ["say", "-v", "siri", "hi"]

    def test_mixed_word_keeps_prefix(self):
        bp = Blueprint.from_args(["echo", "simon says {{text#desc}}"])

        assert bp.build_command_args({"text": "Hello World"}) == ["echo", "simon says Hello World"]

    def test_spacing_around_hash(self):
        bp = Blueprint.from_args(["echo", "{{text # the text to echo}}"])

        assert bp.build_command_args({"text": "Hello World"}) == ["echo", "Hello World"]

    def test_every_occurrence_is_replaced(self):
        bp = Blueprint.from_args(["cp", "{{file#source}}", "{{file}}.bak", "--{{file}}--{{file}}"])

        assert bp.build_command_args({"file": "a.txt"}) == ["cp", "a.txt", "a.txt.bak", "--a.txt--a.txt"]

    def test_several_fields_in_one_word(self):
        bp = Blueprint.from_args(["scp", "{{user}}@{{host}}:{{path}}"])

        rendered = bp.build_command_args({"user": "root", "host": "example.com", "path": "/srv"})
        assert rendered == ["scp", "root@example.com:/srv"]

    def test_unbound_marker_is_left_in_place(self):
        bp = Blueprint.from_args(["scp", "{{user#login}}@{{host}}"])

        assert bp.build_command_args({"user": "root"}) == ["scp", "root@{{host}}"]
        assert bp.build_command_args({}) == ["scp", "{{user#login}}@{{host}}"]

    def test_non_string_value_leaves_marker(self):
        bp = Blueprint.from_args(["sleep", "{{seconds}}"])

        assert bp.build_command_args({"seconds": 5}) == ["sleep", "{{seconds}}"]

    def test_empty_string_is_substituted(self):
        bp = Blueprint.from_args(["echo", "<{{text}}>"])

        assert bp.build_command_args({"text": ""}) == ["echo", "<>"]

    def test_value_with_marker_syntax_is_inserted_literally(self):
        bp = Blueprint.from_args(["echo", "{{text}} {{other}}"])

        rendered = bp.build_command_args({"text": "{{other}}", "other": "z"})
        assert rendered == ["echo", "{{other}} z"]

    def test_regex_replacement_syntax_is_inserted_literally(self):
        bp = Blueprint.from_args(["echo", "{{text}}"])

        assert bp.build_command_args({"text": r"\1 \g<0> $1"}) == ["echo", r"\1 \g<0> $1"]

    def test_hyphenated_and_spaced_names_use_normalised_key(self):
        bp = Blueprint.from_args(["cat", "{{ file-name # input }}"])

        assert bp.build_command_args({"file_name": "notes.md"}) == ["cat", "notes.md"]


class TestCombined:
    def test_required_and_additional_args(self):
        bp = Blueprint.from_args(["echo", "{{text#the text to echo}}", "[args...]"])

        rendered = bp.build_command_args({"text": "Hello", "args": ["World", "from", "args"]})
        assert rendered == ["echo", "Hello", "World", "from", "args"]

    def test_word_order_is_preserved(self):
        bp = Blueprint.from_args(["tool", "[pre...]", "--mid", "{{x}}", "[opt]", "end"])

        rendered = bp.build_command_args({"pre": ["p1", "p2"], "x": "X", "opt": "O"})
        assert rendered == ["tool", "p1", "p2", "--mid", "X", "O", "end"]

    def test_rendering_does_not_change_the_blueprint(self):
        bp = Blueprint.from_args(["echo", "{{text#desc}}", "[args...]"])
        description = bp.tool_description
        schema = bp.input_schema

        bp.build_command_args({"text": "x", "args": ["y"]})
        bp.build_command_args({})

        assert bp.tool_description == description
        assert bp.input_schema == schema

    def test_round_trip_with_placeholder_values(self):
        argv = ["cp", "-r", "{{source#from}}", "{{dest}}", "[target]", "[flags...]"]
        bp = Blueprint.from_args(argv)

        # Bind every field to its own template text; rendering must give argv back.
        params = {}
        for word in bp.words:
            for field in word.fields:
                if field.kind is FieldKind.REQUIRED:
                    params[field.name] = field.placeholder
                elif field.kind is FieldKind.OPTIONAL_ARRAY:
                    params[field.name] = [word.text]
                else:
                    params[field.name] = word.text

        assert bp.build_command_args(params) == argv
        assert all(word.kind is not WordKind.LITERAL for word in bp.words[1:])
