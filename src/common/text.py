"""Markup cleanup shared by item extraction and tokenization."""

from __future__ import annotations

import re

NAMED_ENTITIES = {
    "quot": '"',
    "apos": "'",
    "amp": "&",
    "lt": "<",
    "gt": ">",
    "nbsp": " ",
}

ENTITY_RE = re.compile(r"&(?:#(\d+)|#[xX]([0-9a-fA-F]+)|(quot|apos|amp|lt|gt|nbsp));")
TAG_RE = re.compile(r"<[^>]*>")
CDATA_RE = re.compile(r"<!\[CDATA\[|\]\]>")


def _replace_entity(match: re.Match) -> str:
    decimal, hexadecimal, name = match.groups()
    if name:
        return NAMED_ENTITIES[name]
    codepoint = int(decimal) if decimal else int(hexadecimal, 16)
    try:
        return chr(codepoint)
    except (ValueError, OverflowError):
        return match.group(0)


def decode_entities(text: str) -> str:
    """Decode numeric character references and the standard named entities.

    Single pass, so "&amp;lt;" becomes "&lt;" rather than "<".
    """
    if "&" not in text:
        return text
    return ENTITY_RE.sub(_replace_entity, text)


def strip_tags(text: str, replacement: str = "") -> str:
    """Remove anything that looks like a markup tag."""
    return TAG_RE.sub(replacement, text)


def strip_cdata(text: str) -> str:
    """Remove CDATA open and close markers, keeping their content."""
    return CDATA_RE.sub("", text)
