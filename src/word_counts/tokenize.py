"""Split free text into countable words."""

from __future__ import annotations

import re
import unicodedata

from common.text import decode_entities, strip_cdata, strip_tags

MIN_TOKEN_LENGTH = 3
MAX_TOKEN_LENGTH = 49

WHITESPACE_RE = re.compile(r"\s+")


def _keep_char(char: str) -> bool:
    if char == "-" or char.isspace():
        return True
    return unicodedata.category(char)[0] in ("L", "M")


def normalize_text(text: str) -> str:
    """Reduce text to lowercase letters, combining marks, hyphens and single spaces."""
    text = decode_entities(text)
    text = strip_tags(strip_cdata(text), " ")
    text = "".join(char if _keep_char(char) else " " for char in text)
    return WHITESPACE_RE.sub(" ", text).strip().lower()


def _is_word(token: str) -> bool:
    if not MIN_TOKEN_LENGTH <= len(token) <= MAX_TOKEN_LENGTH:
        return False
    if token.isdigit():
        return False
    # Runs of hyphens carry no letters
    return any(char != "-" for char in token)


def tokenize(text: str | None) -> list[str]:
    """Tokenize text into words, in order of appearance.

    Tokens shorter than 3 or longer than 49 characters, all-digit tokens and
    hyphen-only tokens are dropped.
    """
    if not text:
        return []
    return [token for token in normalize_text(text).split(" ") if _is_word(token)]
