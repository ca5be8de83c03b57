"""Tests for converter/extensions.py: registry, inline rules and table rules."""

from __future__ import annotations

import dataclasses
import re

import mistune
import pytest

from content_reader.converter.extensions import (
    IMAGE_PATTERN,
    LINK_PATTERN,
    SPAN_PATTERN,
    ExtensionRegistry,
    InlineExtension,
    create_registry,
    table_plugin,
)


def _parser(registry: ExtensionRegistry | None = None):
    md = mistune.create_markdown(renderer="ast")
    md.use(table_plugin)
    md.use(registry or create_registry())
    return md


def _inline(md, text: str) -> list[dict]:
    tokens = md(text)
    assert tokens[0]["type"] == "paragraph"
    return tokens[0]["children"]


class TestRegistry:

    def test_names_in_priority_order(self):
        assert create_registry().names == ("attr_image", "attr_link", "attr_span")

    def test_registry_is_immutable(self):
        registry = create_registry()
        with pytest.raises(dataclasses.FrozenInstanceError):
            registry.before = "emphasis"  # type: ignore[misc]

    def test_rules_inserted_before_link(self):
        rules = _parser().inline.rules
        assert rules.index("attr_image") < rules.index("attr_link")
        assert rules.index("attr_link") < rules.index("attr_span")
        assert rules.index("attr_span") < rules.index("link")

    def test_install_is_idempotent(self):
        registry = create_registry()
        md = _parser(registry)
        registry(md)
        md.use(registry)
        for name in registry.names:
            assert md.inline.rules.count(name) == 1

    def test_custom_registry(self):
        registry = ExtensionRegistry(extensions=(
            InlineExtension("attr_image", IMAGE_PATTERN, create_registry().extensions[0].parse),
        ))
        md = _parser(registry)
        assert "attr_image" in md.inline.rules
        assert "attr_link" not in md.inline.rules


class TestPatterns:

    def test_image_pattern_groups(self):
        m = re.match(IMAGE_PATTERN, '![Alt](./a.png "Cap"){.x}')
        assert m is not None
        assert m.group("cr_img_alt") == "Alt"
        assert m.group("cr_img_src") == "./a.png"
        assert m.group("cr_img_title") == "Cap"
        assert m.group("cr_img_attrs") == ".x"

    def test_link_pattern_rejects_image_position(self):
        assert re.search(LINK_PATTERN, "![a](b)") is None

    def test_link_pattern_accepts_escaped_bang(self):
        m = re.search(LINK_PATTERN, r"\![a](b){.x}")
        assert m is not None
        assert m.group("cr_link_attrs") == ".x"

    def test_span_pattern_accepts_escaped_bang(self):
        assert re.search(SPAN_PATTERN, r"\![a]{.x}") is not None
        assert re.search(SPAN_PATTERN, "![a]{.x}") is None

    def test_span_requires_attributes(self):
        assert re.match(SPAN_PATTERN, "[text]{}") is None
        assert re.match(SPAN_PATTERN, "[text]{.c}") is not None


class TestInlineRules:

    def test_attr_image_token(self):
        children = _inline(_parser(), "![Logo](./logo.svg){.featured #main-logo}")
        assert children == [{
            "type": "attr_image",
            "raw": "![Logo](./logo.svg){.featured #main-logo}",
            "attrs": {
                "alt": "Logo",
                "url": "./logo.svg",
                "title": None,
                "attributes": {"id": "main-logo", "class": "featured"},
            },
        }]

    def test_attr_link_token_with_title(self):
        children = _inline(_parser(), '[Docs](https://example.com "Read"){target=_blank}')
        token = children[0]
        assert token["type"] == "attr_link"
        assert token["attrs"]["label"] == "Docs"
        assert token["attrs"]["url"] == "https://example.com"
        assert token["attrs"]["title"] == "Read"
        assert token["attrs"]["attributes"] == {"target": "_blank"}

    def test_attr_link_without_attributes(self):
        token = _inline(_parser(), "[Home](/)")[0]
        assert token["type"] == "attr_link"
        assert token["attrs"]["attributes"] == {}

    def test_attr_span_children_are_parsed(self):
        token = _inline(_parser(), "[**bold** word]{.highlight}")[0]
        assert token["type"] == "attr_span"
        assert token["attrs"]["label"] == "**bold** word"
        assert token["attrs"]["attributes"] == {"class": "highlight"}
        assert token["children"][0]["type"] == "strong"

    def test_plain_brackets_are_not_spans(self):
        children = _inline(_parser(), "a [note] here")
        assert all(child["type"] == "text" for child in children)

    def test_link_after_escaped_bang_keeps_attributes(self):
        children = _inline(_parser(), r"\![a](b){.x}")
        assert children[0]["type"] == "text"
        assert children[0]["raw"] == "!"
        assert children[1]["type"] == "attr_link"
        assert children[1]["attrs"]["attributes"] == {"class": "x"}


def _table(md, text: str) -> dict:
    tokens = [token for token in md(text) if token["type"] != "blank_line"]
    assert tokens[0]["type"] == "table"
    return tokens[0]


def _cell_texts(row: dict) -> list[str]:
    return ["".join(child["raw"] for child in cell["children"]) for cell in row["children"]]


class TestTableRules:

    def test_regular_table(self):
        head, body = _table(_parser(), "| a | b |\n|:--|--:|\n| 1 | 2 |\n")["children"]
        assert _cell_texts(head) == ["a", "b"]
        assert [cell["attrs"] for cell in head["children"]] == [
            {"align": "left", "head": True},
            {"align": "right", "head": True},
        ]
        assert [_cell_texts(row) for row in body["children"]] == [["1", "2"]]

    def test_short_row_padded(self):
        _, body = _table(_parser(), "| a | b |\n|---|---|\n| 1 |\n")["children"]
        row = body["children"][0]
        assert _cell_texts(row) == ["1", ""]
        assert row["children"][1]["attrs"] == {"align": None, "head": False}

    def test_long_row_truncated(self):
        _, body = _table(_parser(), "| a | b |\n|---|---|\n| 1 | 2 | 3 |\n")["children"]
        assert _cell_texts(body["children"][0]) == ["1", "2"]

    def test_table_without_outer_pipes(self):
        head, body = _table(_parser(), "a | b\n:-:|---\n1 | 2 | 3\n")["children"]
        assert _cell_texts(head) == ["a", "b"]
        assert head["children"][0]["attrs"]["align"] == "center"
        assert _cell_texts(body["children"][0]) == ["1", "2"]

    def test_header_alignment_mismatch_is_not_a_table(self):
        tokens = _parser()("| a | b |\n|---|\n| 1 | 2 |\n")
        assert tokens[0]["type"] == "paragraph"

    def test_escaped_pipe_stays_in_cell(self):
        _, body = _table(_parser(), "| a | b |\n|---|---|\n| x \\| y | z |\n")["children"]
        assert len(body["children"][0]["children"]) == 2
