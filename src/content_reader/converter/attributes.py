"""Curly-brace attribute micro-syntax.

Images, links and bracketed spans may carry a trailing attribute block::

    ![Hero](./hero.jpg){role=hero width=1200 .featured #main autoplay}

The block body is a whitespace-separated sequence of terms:

========================  ==========================================
``key="quoted value"``    string value (single quotes work too)
``key=bareword``          string value up to whitespace or ``}``
``.className``            appended to ``class`` (space-joined)
``#idName``               sets ``id`` (last one wins)
``flag``                  boolean ``True``
========================  ==========================================

Parsing never fails: anything the scanner does not recognise is skipped
one character at a time, so malformed input degrades to a partial or
empty map.
"""

from __future__ import annotations

import re
from typing import Any

AttributeMap = dict[str, Any]

# Trailing {...} block, allowing one level of nested braces inside.
_TRAILING_ATTRS_RE = re.compile(r"\{([^{}]*(?:\{[^{}]*\}[^{}]*)*)\}\s*$")
_HAS_ATTRS_RE = re.compile(r"\{[^{}]+\}\s*$")
_KEBAB_RE = re.compile(r"-([a-z])")


# ---------------------------------------------------------------------------
# Scanner
# ---------------------------------------------------------------------------

def _is_name_start(ch: str) -> bool:
    return ch == "_" or ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def _is_name_char(ch: str) -> bool:
    return ch == "_" or ch == "-" or ch.isalnum()


def _scan_name(src: str, pos: int) -> int:
    """Return the end of the identifier starting at *pos* (or *pos* if none)."""
    if pos >= len(src) or not _is_name_start(src[pos]):
        return pos
    end = pos + 1
    while end < len(src) and _is_name_char(src[end]):
        end += 1
    return end


def _scan_bare_value(src: str, pos: int) -> int:
    end = pos
    while end < len(src) and not src[end].isspace() and src[end] != "}":
        end += 1
    return end


def _scan_key_value(src: str, name_end: int) -> tuple[str, int] | None:
    """Scan the value of ``key=...``; *name_end* points at the ``=``."""
    value_start = name_end + 1
    if value_start >= len(src):
        return None
    quote = src[value_start]
    if quote in ("'", '"'):
        close = src.find(quote, value_start + 1)
        if close != -1:
            return src[value_start + 1:close], close + 1
    end = _scan_bare_value(src, value_start)
    if end == value_start:
        return None
    return src[value_start:end], end


def parse_attribute_string(attr_string: str) -> AttributeMap:
    """Parse the body of an attribute block into an attribute map.

    Parameters
    ----------
    attr_string:
        The text between the curly braces.

    Returns
    -------
    dict
        ``{name: str | True}`` plus ``class`` (space-joined, in order of
        appearance) and ``id`` when present.  Empty or non-string input
        yields ``{}``.

    Examples
    --------
    >>> parse_attribute_string("role=hero width=1200 .featured #main autoplay")
    {'role': 'hero', 'width': '1200', 'id': 'main', 'autoplay': True, 'class': 'featured'}
    """
    if not attr_string or not isinstance(attr_string, str):
        return {}

    attrs: AttributeMap = {}
    classes: list[str] = []
    src = attr_string
    pos = 0

    while pos < len(src):
        ch = src[pos]

        if ch.isspace():
            pos += 1
            continue

        if ch in (".", "#"):
            end = _scan_name(src, pos + 1)
            if end > pos + 1:
                name = src[pos + 1:end]
                if ch == ".":
                    classes.append(name)
                else:
                    attrs["id"] = name
                pos = end
                continue
            pos += 1
            continue

        name_end = _scan_name(src, pos)
        if name_end > pos:
            name = src[pos:name_end]
            if name_end < len(src) and src[name_end] == "=":
                scanned = _scan_key_value(src, name_end)
                if scanned is not None:
                    attrs[name], pos = scanned
                    continue
            elif name_end == len(src) or src[name_end].isspace():
                attrs[name] = True
                pos = name_end
                continue

        # Unrecognised input: resume one character further on.
        pos += 1

    if classes:
        attrs["class"] = " ".join(classes)

    return attrs


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def extract_trailing_attributes(text: str) -> tuple[str, AttributeMap]:
    """Split a trailing ``{...}`` block off *text* and parse it.

    Returns
    -------
    tuple[str, dict]
        The text without the block (right-stripped) and the parsed
        attributes.  Without a trailing block the original text is
        returned unchanged with an empty map.
    """
    if not text or not isinstance(text, str):
        return text or "", {}

    m = _TRAILING_ATTRS_RE.search(text)
    if m is None:
        return text, {}
    return text[:m.start()].rstrip(), parse_attribute_string(m.group(1))


def has_attributes(text: str) -> bool:
    """Return True if *text* ends with a non-empty ``{...}`` block."""
    return bool(text) and _HAS_ATTRS_RE.search(text) is not None


def merge_attributes(*attr_maps: AttributeMap | None) -> AttributeMap:
    """Merge attribute maps left to right.

    Later maps override earlier ones, except ``class``: every ``class``
    value is kept and the values are space-joined in order.  ``None``
    entries are skipped.
    """
    result: AttributeMap = {}
    classes: list[str] = []
    for attrs in attr_maps:
        if not attrs:
            continue
        for key, value in attrs.items():
            if key == "class":
                classes.append(value)
            else:
                result[key] = value
    if classes:
        result["class"] = " ".join(classes)
    return result


def normalize_attribute_names(attrs: AttributeMap) -> AttributeMap:
    """Return a copy of *attrs* with kebab-case keys converted to camelCase."""
    return {
        _KEBAB_RE.sub(lambda m: m.group(1).upper(), key): value
        for key, value in attrs.items()
    }
