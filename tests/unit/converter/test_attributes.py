"""Tests for converter/attributes.py: the curly-brace attribute grammar."""

from __future__ import annotations

import pytest

from content_reader.converter.attributes import (
    extract_trailing_attributes,
    has_attributes,
    merge_attributes,
    normalize_attribute_names,
    parse_attribute_string,
)


class TestParseAttributeString:

    def test_mixed_terms(self):
        result = parse_attribute_string("role=hero width=1200 .featured #main autoplay")
        assert result == {
            "role": "hero",
            "width": "1200",
            "id": "main",
            "autoplay": True,
            "class": "featured",
        }

    def test_class_is_last_key(self):
        result = parse_attribute_string(".a role=hero")
        assert list(result) == ["role", "class"]

    def test_multiple_classes_joined_in_order(self):
        assert parse_attribute_string(".one .two .three") == {"class": "one two three"}

    def test_last_id_wins(self):
        assert parse_attribute_string("#first #second") == {"id": "second"}

    def test_double_quoted_value_keeps_spaces(self):
        assert parse_attribute_string('title="Hello world"') == {"title": "Hello world"}

    def test_single_quoted_value(self):
        assert parse_attribute_string("alt='A B'") == {"alt": "A B"}

    def test_unterminated_quote_falls_back_to_bare_value(self):
        assert parse_attribute_string('title="open') == {"title": '"open'}

    def test_bare_value_is_string(self):
        result = parse_attribute_string("width=1200")
        assert result["width"] == "1200"
        assert isinstance(result["width"], str)

    def test_boolean_flags(self):
        assert parse_attribute_string("autoplay muted loop") == {
            "autoplay": True,
            "muted": True,
            "loop": True,
        }

    def test_hyphenated_names(self):
        assert parse_attribute_string("data-id=7 .btn-lg") == {
            "data-id": "7",
            "class": "btn-lg",
        }

    def test_extra_whitespace(self):
        assert parse_attribute_string("   .a    #b   ") == {"class": "a", "id": "b"}

    @pytest.mark.parametrize("value", ["", None, 42, ["a"]])
    def test_empty_or_non_string_input(self, value):
        assert parse_attribute_string(value) == {}

    def test_garbage_degrades_to_partial_map(self):
        result = parse_attribute_string("!!! .ok @@ #id =")
        assert result == {"class": "ok", "id": "id"}

    def test_lone_markers_ignored(self):
        assert parse_attribute_string(". # =") == {}

    def test_key_with_empty_value_is_skipped(self):
        assert parse_attribute_string("key= other") == {"other": True}


class TestExtractTrailingAttributes:

    def test_splits_trailing_block(self):
        text, attrs = extract_trailing_attributes("Heading {#intro .lead}")
        assert text == "Heading"
        assert attrs == {"id": "intro", "class": "lead"}

    def test_no_block(self):
        assert extract_trailing_attributes("plain text") == ("plain text", {})

    def test_block_not_at_end(self):
        assert extract_trailing_attributes("{.x} tail") == ("{.x} tail", {})

    def test_trailing_whitespace_after_block(self):
        text, attrs = extract_trailing_attributes("Title {.a}   ")
        assert text == "Title"
        assert attrs == {"class": "a"}

    def test_empty_input(self):
        assert extract_trailing_attributes("") == ("", {})


class TestHasAttributes:

    @pytest.mark.parametrize("text", ["x {.a}", "{#id}", "word {k=v}  "])
    def test_true(self, text):
        assert has_attributes(text) is True

    @pytest.mark.parametrize("text", ["", "x {}", "x {.a} y", "no braces"])
    def test_false(self, text):
        assert has_attributes(text) is False


class TestMergeAttributes:

    def test_later_maps_win(self):
        assert merge_attributes({"a": "1", "b": "2"}, {"b": "3"}) == {"a": "1", "b": "3"}

    def test_classes_accumulate(self):
        result = merge_attributes({"class": "one"}, {"class": "two"}, {"id": "x"})
        assert result == {"id": "x", "class": "one two"}

    def test_none_and_empty_maps_skipped(self):
        assert merge_attributes(None, {}, {"k": True}) == {"k": True}

    def test_no_maps(self):
        assert merge_attributes() == {}


class TestNormalizeAttributeNames:

    def test_kebab_to_camel(self):
        assert normalize_attribute_names({"data-id": "1", "aria-label-text": "x"}) == {
            "dataId": "1",
            "ariaLabelText": "x",
        }

    def test_plain_names_unchanged(self):
        attrs = {"role": "hero", "class": "a"}
        assert normalize_attribute_names(attrs) == attrs

    def test_returns_copy(self):
        attrs = {"data-x": 1}
        normalize_attribute_names(attrs)
        assert attrs == {"data-x": 1}
