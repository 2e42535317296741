# tests/test_markup.py
from __future__ import annotations

from charsleuth.pipeline.markup import strip_tags


def test_removes_tags_and_delimiters():
    assert strip_tags(b"<p>Hello <b>world</b></p>") == b"Hello world"


def test_attributes_are_removed_with_their_tag():
    data = b'<a href="http://example.com" class="link">click</a> here'
    assert strip_tags(data) == b"click here"


def test_no_markup_returns_input():
    data = b"Just plain text with no HTML or XML"
    assert strip_tags(data) is data


def test_empty_input():
    assert strip_tags(b"") == b""


def test_unterminated_tag_drops_the_rest():
    assert strip_tags(b"text before <never closed and more") == b"text before "


def test_only_tags_returns_original():
    data = b"<html><body>  </body></html>"
    assert strip_tags(data) == data


def test_does_not_modify_input():
    original = bytearray(b"<i>caf\xe9</i>")
    snapshot = bytes(original)
    result = strip_tags(bytes(original))
    assert result == b"caf\xe9"
    assert bytes(original) == snapshot


def test_high_bytes_between_tags_survive():
    data = "<td>Größe</td><td>Maße</td>".encode("latin-1")
    assert strip_tags(data) == "GrößeMaße".encode("latin-1")


def test_stray_closing_bracket_is_kept():
    assert strip_tags(b"a > b <x>c") == b"a > b c"


def test_non_ascii_attribute_values_are_removed():
    data = (
        b'<img alt="'
        + "Привет".encode("cp1251")
        + b'" title="\xe9t\xe9">caf\xe9 <b class="\xc0\xc1">ok</b>'
    )
    assert strip_tags(data) == b"caf\xe9 ok"
