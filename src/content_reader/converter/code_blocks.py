"""Code fences: info-string parsing, dedenting and tagged data decoding.

A fence info string has the form ``language[:tag]``::

    ```json:nav-links
    [{"label": "Home"}]
    ```

A tagged fence whose language is a data language (``json``, ``yaml``,
``yml`` by default) is decoded into a ``dataBlock`` node.  When decoding
fails, or the fence is untagged, a display ``codeBlock`` is produced.
"""

from __future__ import annotations

import json
import re
from typing import Any

import yaml

from content_reader.converter.context import ConversionContext
from content_reader.errors import ContentReaderDataError
from content_reader.models import NodeType

_LEADING_WS_RE = re.compile(r"^\s*")

_JSON_SCALARS = (str, int, float, bool, type(None))


class _DataLoader(yaml.SafeLoader):
    """Safe YAML loader that leaves timestamps as plain strings."""


_DataLoader.yaml_implicit_resolvers = {
    first: [
        (tag, regexp)
        for tag, regexp in resolvers
        if tag != "tag:yaml.org,2002:timestamp"
    ]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def parse_code_info(info: str | None) -> tuple[str | None, str | None]:
    """Split a fence info string into ``(language, tag)``.

    Empty parts come back as None: ``"json:nav"`` -> ``("json", "nav")``,
    ``":nav"`` -> ``(None, "nav")``, ``None`` -> ``(None, None)``.
    """
    if not info:
        return None, None
    parts = info.split(":")
    language = parts[0] or None
    tag = parts[1] if len(parts) > 1 and parts[1] else None
    return language, tag


def dedent_code(text: str) -> str:
    """Strip the first line's indentation from every line, then trim.

    Lines that do not start with that exact prefix are left alone.  The
    result has no leading or trailing blank lines, so applying the
    function twice gives the same result as applying it once.
    """
    lines = text.split("\n")
    indent = _LEADING_WS_RE.match(lines[0]).group(0)
    if indent:
        lines = [line[len(indent):] if line.startswith(indent) else line for line in lines]
    return "\n".join(lines).strip()


def parse_data(text: str, language: str | None) -> Any:
    """Decode *text* as JSON or YAML according to *language*.

    Raises
    ------
    ContentReaderDataError
        When the body is empty, fails to parse, or decodes to null.
        Languages without a decoder raise as well, and so do YAML
        documents holding values JSON cannot represent (``!!binary``,
        ``!!set``, explicit ``!!timestamp``).
    """
    lang = (language or "").lower()
    context = {"language": language}

    if not text:
        raise ContentReaderDataError("Tagged code block is empty.", context=context)

    if lang == "json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ContentReaderDataError(
                f"Invalid JSON in tagged code block: {exc}", context=context, cause=exc,
            ) from exc
    elif lang in ("yaml", "yml"):
        try:
            data = yaml.load(text, Loader=_DataLoader)
        except yaml.YAMLError as exc:
            raise ContentReaderDataError(
                f"Invalid YAML in tagged code block: {exc}", context=context, cause=exc,
            ) from exc
        if not _is_json_compatible(data):
            raise ContentReaderDataError(
                "YAML in tagged code block holds values JSON cannot represent.",
                context=context,
            )
    else:
        raise ContentReaderDataError(
            f"Language {language!r} has no data decoder.", context=context,
        )

    if data is None:
        raise ContentReaderDataError("Tagged code block decoded to null.", context=context)
    return data


def _is_json_compatible(value: Any) -> bool:
    if isinstance(value, dict):
        return all(
            isinstance(key, _JSON_SCALARS) and _is_json_compatible(item)
            for key, item in value.items()
        )
    if isinstance(value, list):
        return all(_is_json_compatible(item) for item in value)
    return isinstance(value, _JSON_SCALARS)


def build_code_block(
    info: str | None,
    body: str,
    ctx: ConversionContext,
) -> dict:
    """Build a ``dataBlock`` or ``codeBlock`` node for a fenced code token."""
    language, tag = parse_code_info(info)
    text = dedent_code(body)

    if tag is None:
        return _code_block({"language": language}, text)

    if (language or "").lower() in ctx.config.data_languages:
        try:
            data = parse_data(text, language)
        except ContentReaderDataError as exc:
            ctx.add_warning(
                "DATA_BLOCK_FALLBACK",
                f"Tagged block '{tag}' kept as code: {exc.message}",
                language=language,
                tag=tag,
            )
        else:
            return {
                "type": NodeType.DATA_BLOCK.value,
                "attrs": {"tag": tag, "data": data},
            }

    return _code_block({"language": language, "tag": tag}, text)


def _code_block(attrs: dict, text: str) -> dict:
    return {
        "type": NodeType.CODE_BLOCK.value,
        "attrs": attrs,
        "content": [{"type": NodeType.TEXT.value, "text": text}],
    }
