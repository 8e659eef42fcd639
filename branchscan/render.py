"""Output formatting for discovered heads.

Text output is one ``name@revision`` line per head. JSON output is an array
of objects, colorized with Pygments when written to a terminal. Repository
names are untrusted, so terminal control bytes are escaped before printing.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable
from functools import lru_cache

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import JsonLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .crawler import CandidateHead

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
FALLBACK_STYLE = "monokai"


def sanitize_terminal_text(text: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(text) is None:
        return text
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group()):02x}", text)


def head_to_dict(head: CandidateHead) -> dict[str, object]:
    return {
        "name": head.name,
        "revision": head.revision,
        "last_modified": head.last_modified,
    }


def format_text(heads: Iterable[CandidateHead]) -> str:
    return "".join(f"{sanitize_terminal_text(head.name)}@{head.revision}\n" for head in heads)


def format_json(heads: Iterable[CandidateHead]) -> str:
    return json.dumps([head_to_dict(head) for head in heads], indent=2) + "\n"


def _normalize_style(style: str) -> str:
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return FALLBACK_STYLE
    return style


@lru_cache(maxsize=8)
def _formatter_for_style(style: str) -> Terminal256Formatter:
    return Terminal256Formatter(style=style)


def colorize_json(text: str, style: str = FALLBACK_STYLE) -> str:
    """Highlight JSON for a terminal; unknown styles fall back to ``monokai``."""
    formatter = _formatter_for_style(_normalize_style(style))
    return highlight(text, JsonLexer(), formatter)


def render_heads(
    heads: Iterable[CandidateHead],
    output_format: str,
    *,
    color: bool = False,
    style: str = FALLBACK_STYLE,
) -> str:
    if output_format == "json":
        text = format_json(heads)
        return colorize_json(text, style) if color else text
    return format_text(heads)


__all__ = [
    "sanitize_terminal_text",
    "head_to_dict",
    "format_text",
    "format_json",
    "colorize_json",
    "render_heads",
]
