"""Word frequency counting over a key-value store."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from common.config import StoreConfig
from word_counts.models import WordCount
from word_counts.store import KeyValueStore, open_store
from word_counts.tokenize import tokenize

logger = logging.getLogger(__name__)

KEY_PREFIX = "word:"


def _key(word: str) -> str:
    return f"{KEY_PREFIX}{word}"


class WordAggregator:
    """Owns all reads and writes of word counters in the store.

    Counters live under the ``word:<token>`` namespace. Store failures
    propagate as ``StoreError`` without retry.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def increment(self, word: str, by: int = 1) -> int:
        """Add ``by`` to the counter for ``word`` and return the new total."""
        if isinstance(by, bool) or not isinstance(by, int) or by < 1:
            raise ValueError(f"Increment must be a positive integer, got {by!r}")
        return self._store.incrby(_key(word), by)

    def get_count(self, word: str) -> int:
        return self._store.get(_key(word)) or 0

    def _counts(self) -> list[WordCount]:
        keys = self._store.keys(KEY_PREFIX)
        if not keys:
            return []
        values = self._store.mget(keys)
        return [
            WordCount(word=key[len(KEY_PREFIX):], count=value)
            for key, value in zip(keys, values)
            if value is not None and value > 0
        ]

    def total_unique_words(self) -> int:
        return len(self._counts())

    def top_words(self, k: int = 100) -> list[WordCount]:
        """Most frequent words, descending by count, ties ordered by word."""
        if k <= 0:
            return []
        counts = sorted(self._counts(), key=lambda wc: (-wc.count, wc.word))
        return counts[:k]

    def clear_all(self) -> None:
        self._store.flush()
        logger.info("Cleared all word counts")

    def process_text(self, text: str | None) -> int:
        """Tokenize text and count every token once per occurrence.

        Returns:
            Number of tokens counted
        """
        tokens = tokenize(text)
        for token in tokens:
            self.increment(token)
        return len(tokens)


@contextmanager
def open_aggregator(config: StoreConfig) -> Iterator[WordAggregator]:
    """Context manager yielding an aggregator whose store is released on exit."""
    with open_store(config) as store:
        yield WordAggregator(store)
