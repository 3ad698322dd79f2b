"""Tests for common.text module."""

from common.text import decode_entities, strip_cdata, strip_tags


class TestDecodeEntities:
    def test_named_entities(self) -> None:
        assert decode_entities("&quot;a&quot; &apos;b&apos; &amp; &lt;c&gt;&nbsp;d") == "\"a\" 'b' & <c> d"

    def test_numeric_entities(self) -> None:
        assert decode_entities("&#1052;&#x438;&#X440;") == "Мир"

    def test_single_pass(self) -> None:
        assert decode_entities("&amp;lt;") == "&lt;"

    def test_unknown_entities_left_alone(self) -> None:
        assert decode_entities("&hellip; &copy;") == "&hellip; &copy;"

    def test_out_of_range_codepoint_left_alone(self) -> None:
        assert decode_entities("&#99999999;") == "&#99999999;"


class TestStripTags:
    def test_removes_tags(self) -> None:
        assert strip_tags('<p class="x">Hello <b>world</b></p>') == "Hello world"

    def test_replacement(self) -> None:
        assert strip_tags("one<br/>two", " ") == "one two"


class TestStripCdata:
    def test_removes_markers(self) -> None:
        assert strip_cdata("<![CDATA[inside]]>") == "inside"
