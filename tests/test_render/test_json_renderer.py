"""Tests for the JSON renderer: layout, scalars, styling and parse errors."""

from __future__ import annotations

import json
import re

import pytest

from reqview.exceptions import InvalidJSONError
from reqview.render.json_renderer import format_json, parse_json, render_json
from reqview.render.styles import StyleScheme


@pytest.fixture()
def plain() -> StyleScheme:
    return StyleScheme.plain()


@pytest.fixture()
def tagged() -> StyleScheme:
    """A scheme whose markers name the category, easy to assert on."""
    return StyleScheme(
        styles={
            "key": "key",
            "string": "string",
            "number": "number",
            "boolean": "boolean",
            "null": "null",
        }
    )


# ------------------------------------------------------------------ #
# Layout
# ------------------------------------------------------------------ #


class TestLayout:
    def test_single_member_object(self, plain):
        value = parse_json('{"message":"Hello, JSON!"}')
        assert render_json(value, 0, plain) == '{\n  "message": "Hello, JSON!"\n}'

    def test_empty_object(self, plain):
        assert render_json({}, 0, plain) == "{}"

    def test_empty_array(self, plain):
        assert render_json([], 0, plain) == "[]"

    def test_empty_containers_nested(self, plain):
        assert render_json({"a": {}, "b": []}, 0, plain) in (
            '{\n  "a": {},\n  "b": []\n}',
            '{\n  "b": [],\n  "a": {}\n}',
        )

    def test_array_one_element_per_line(self, plain):
        assert render_json([1, 2, 3], 0, plain) == "[\n  1,\n  2,\n  3\n]"

    def test_nested_indentation(self, plain):
        rendered = render_json({"outer": {"inner": [True, None]}}, 0, plain)
        assert rendered == (
            "{\n"
            '  "outer": {\n'
            '    "inner": [\n'
            "      true,\n"
            "      null\n"
            "    ]\n"
            "  }\n"
            "}"
        )

    def test_level_offsets_closing_token(self, plain):
        assert render_json({"a": 1}, 2, plain) == '{\n      "a": 1\n    }'

    def test_no_trailing_newline(self, plain):
        assert not render_json({"a": [1]}, 0, plain).endswith("\n")

    def test_no_trailing_comma_before_closer(self, plain):
        rendered = render_json({"a": 1, "b": 2, "c": [1, 2]}, 0, plain)
        assert ",\n}" not in rendered
        assert ",\n  ]" not in rendered

    def test_default_scheme_is_plain(self):
        assert render_json({"a": "b"}) == '{\n  "a": "b"\n}'


# ------------------------------------------------------------------ #
# Scalars
# ------------------------------------------------------------------ #


class TestScalars:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("text", '"text"'),
            (123, "123"),
            (1.5, "1.5"),
            (-0.25, "-0.25"),
            (1e100, "1e+100"),
            (True, "true"),
            (False, "false"),
            (None, "null"),
        ],
    )
    def test_scalar_rendering(self, plain, value, expected):
        assert render_json(value, 0, plain) == expected

    def test_string_escaping_keeps_output_parseable(self, plain):
        value = {'quote"key': 'line\nbreak "quoted" \\ back'}
        assert json.loads(render_json(value, 0, plain)) == value

    def test_non_ascii_kept_literal(self, plain):
        assert render_json("héllo ✓", 0, plain) == '"héllo ✓"'

    def test_non_finite_float_raises(self, plain):
        with pytest.raises(ValueError):
            render_json({"n": float("inf")}, 0, plain)

    def test_deeply_nested_value(self, plain):
        depth = 2000
        value: list = []
        for _ in range(depth - 1):
            value = [value]
        lines = render_json(value, 0, plain).splitlines()
        assert len(lines) == 2 * depth - 1
        assert lines[depth - 1] == "  " * (depth - 1) + "[]"

    def test_unsupported_type_raises(self, plain):
        with pytest.raises(TypeError):
            render_json({"a": object()}, 0, plain)


# ------------------------------------------------------------------ #
# Styling
# ------------------------------------------------------------------ #


class TestStyling:
    def test_key_and_string_styled(self, tagged):
        rendered = render_json({"message": "Hello, JSON!"}, 0, tagged)
        assert rendered == (
            '{\n  [key]"message"[/key]: [string]"Hello, JSON!"[/string]\n}'
        )

    def test_each_scalar_category(self, tagged):
        assert render_json(7, 0, tagged) == "[number]7[/number]"
        assert render_json(True, 0, tagged) == "[boolean]true[/boolean]"
        assert render_json(None, 0, tagged) == "[null]null[/null]"

    def test_keys_styled_regardless_of_value_type(self, tagged):
        rendered = render_json({"n": 1, "b": False, "z": None, "o": {}}, 0, tagged)
        assert rendered.count("[key]") == 4

    def test_punctuation_never_styled(self, tagged):
        rendered = render_json({"a": [1, {"b": "c"}]}, 0, tagged)
        # Markers wrap only quoted tokens or literal scalars.
        for marker_body in re.findall(r"\[(?:key|string|number|boolean|null)\](.*?)\[/", rendered):
            assert not set(marker_body) & set("{}[],:") or marker_body.startswith('"')

    def test_markup_in_strings_is_escaped(self):
        scheme = StyleScheme(styles={"string": "green"})
        rendered = render_json("[bold]x[/bold]", 0, scheme)
        assert rendered == '[green]"\\[bold]x\\[/bold]"[/green]'


# ------------------------------------------------------------------ #
# Parsing
# ------------------------------------------------------------------ #


class TestParsing:
    def test_parse_bytes(self):
        assert parse_json(b'{"a": [1, 2]}') == {"a": [1, 2]}

    def test_invalid_json_raises_with_parser_message(self):
        with pytest.raises(InvalidJSONError) as exc_info:
            parse_json("{invalid json}")
        assert "Expecting property name" in str(exc_info.value)

    @pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
    def test_non_standard_constants_rejected(self, constant):
        with pytest.raises(InvalidJSONError):
            parse_json(f'{{"x": {constant}}}')

    @pytest.mark.parametrize("number", ["1e400", "-1e400"])
    def test_overflowing_numbers_rejected(self, number):
        with pytest.raises(InvalidJSONError, match="out of range"):
            parse_json(f'{{"n": {number}}}')

    def test_nesting_beyond_the_decoder_rejected(self):
        depth = 1_000_000
        with pytest.raises(InvalidJSONError):
            parse_json("[" * depth + "]" * depth)

    def test_invalid_utf8_rejected(self):
        with pytest.raises(InvalidJSONError):
            parse_json(b'{"a": "\xff"}')

    def test_format_json_produces_nothing_on_failure(self):
        with pytest.raises(InvalidJSONError):
            format_json('{"a": 1,')

    def test_format_json_renders(self):
        assert format_json(b'{"key": "value"}') == '{\n  "key": "value"\n}'


class TestRerenderStability:
    @pytest.mark.parametrize(
        "document",
        [
            '{"key": "value", "number": 123, "bool": true}',
            '[{"a": [1.25, -3, null]}, {}, [], "s"]',
            '{"nested": {"deeper": {"deepest": [false, "x\\ty"]}}}',
            '{"max": 1.7976931348623157e308, "tiny": 5e-324, "big": 123456789012345678901234567890}',
        ],
    )
    def test_render_parse_render_is_stable(self, document):
        first = format_json(document)
        assert json.loads(first) == json.loads(document)
        assert format_json(first) == first
