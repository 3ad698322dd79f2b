"""Data models for word counting."""

from dataclasses import dataclass


@dataclass(frozen=True)
class WordCount:
    """One entry of a ranked word listing."""
    word: str
    count: int
