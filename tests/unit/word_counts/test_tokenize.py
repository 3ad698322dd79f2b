"""Tests for word_counts.tokenize module."""

import pytest

from word_counts.tokenize import normalize_text, tokenize


class TestTokenize:
    def test_strips_tags_punctuation_and_digits(self) -> None:
        assert tokenize("<b>Hello — World2025!</b>") == ["hello", "world"]

    def test_none_and_empty_return_empty(self) -> None:
        assert tokenize(None) == []
        assert tokenize("") == []
        assert tokenize("   ") == []

    def test_lowercases_cyrillic(self) -> None:
        assert tokenize("Новости МИРА сегодня") == ["новости", "мира", "сегодня"]

    def test_drops_short_tokens(self) -> None:
        assert tokenize("a an the ox cat") == ["the", "cat"]

    def test_length_bounds(self) -> None:
        longest = "a" * 49
        too_long = "b" * 50
        assert tokenize(f"{longest} {too_long}") == [longest]

    def test_keeps_word_internal_hyphen(self) -> None:
        assert tokenize("Well-known so-so x-y") == ["well-known", "so-so", "x-y"]

    def test_drops_hyphen_only_tokens(self) -> None:
        assert tokenize("--- words -- here") == ["words", "here"]

    def test_digits_become_separators(self) -> None:
        assert tokenize("covid19 2025 abc123def") == ["covid", "abc", "def"]

    def test_decodes_entities_before_splitting(self) -> None:
        assert tokenize("Tom&amp;Jerry &quot;quoted&quot; caf&#233;") == ["tom", "jerry", "quoted", "café"]

    def test_removes_cdata_markers(self) -> None:
        assert tokenize("<![CDATA[Breaking news]]>") == ["breaking", "news"]

    def test_encoded_tags_are_stripped(self) -> None:
        assert tokenize("&lt;p&gt;Paragraph text&lt;/p&gt;") == ["paragraph", "text"]

    def test_keeps_combining_marks(self) -> None:
        decomposed = "\u043c\u043e\u0438\u0306"
        assert tokenize(decomposed) == [decomposed]

    def test_counts_repeated_words(self) -> None:
        assert tokenize("news news news") == ["news", "news", "news"]

    @pytest.mark.parametrize(
        "text",
        [
            "<b>Hello — World2025!</b>",
            "Путин &amp; Трамп: встреча в Анкоридже, 15 августа",
            "Well-known  facts\n\tabout   CDATA <![CDATA[and]]> tags",
        ],
    )
    def test_idempotent_on_own_output(self, text: str) -> None:
        tokens = tokenize(text)
        assert tokenize(" ".join(tokens)) == tokens


class TestNormalizeText:
    def test_collapses_whitespace(self) -> None:
        assert normalize_text("  One \n\n two\tthree  ") == "one two three"

    def test_replaces_punctuation_with_space(self) -> None:
        assert normalize_text("end.Start,next") == "end start next"
