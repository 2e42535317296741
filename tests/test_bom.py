# tests/test_bom.py
from charsleuth.pipeline import Match
from charsleuth.pipeline.bom import BOMS, detect_bom, find_bom


def test_utf8_bom():
    data = b"\xef\xbb\xbfHello"
    assert detect_bom(data) == Match.text("UTF-8", 100)


def test_utf16_le_bom():
    data = b"\xff\xfeH\x00e\x00l\x00l\x00o\x00"
    assert detect_bom(data) == Match.text("UTF-16LE", 100)


def test_utf16_be_bom():
    data = b"\xfe\xff\x00H\x00e\x00l\x00l\x00o"
    assert detect_bom(data) == Match.text("UTF-16BE", 100)


def test_utf32_le_bom():
    data = b"\xff\xfe\x00\x00" + b"\x48\x00\x00\x00"
    assert detect_bom(data) == Match.text("UTF-32LE", 100)


def test_utf32_be_bom():
    data = b"\x00\x00\xfe\xff" + b"\x00\x00\x00\x48"
    assert detect_bom(data) == Match.text("UTF-32BE", 100)


def test_no_bom():
    assert detect_bom(b"Hello, world!") is None


def test_empty_input():
    assert detect_bom(b"") is None


def test_too_short_for_bom():
    assert detect_bom(b"\xef") is None
    assert detect_bom(b"\xef\xbb") is None


def test_bom_match_carries_no_language():
    result = detect_bom(b"\xef\xbb\xbfBonjour")
    assert result is not None
    assert result.language is None
    assert not result.is_binary


def test_utf32_le_bom_only():
    # Bare UTF-32-LE BOM with no payload is valid (0 % 4 == 0)
    result = detect_bom(b"\xff\xfe\x00\x00")
    assert result is not None
    assert result.encoding == "UTF-32LE"


def test_utf32_le_bom_falls_through_to_utf16_when_payload_not_aligned():
    # FF FE 00 00 30 00: the 2-byte payload is not a whole UTF-32 unit.
    data = b"\xff\xfe\x00\x000\x00"
    result = detect_bom(data)
    assert result is not None
    assert result.encoding == "UTF-16LE"


def test_utf32_be_bom_falls_through_when_payload_not_aligned():
    # 00 00 FE FF does not start with FE FF, so there is no UTF-16 fallback
    data = b"\x00\x00\xfe\xff\x00\x48"
    assert detect_bom(data) is None


def test_find_bom_returns_marker_bytes():
    assert find_bom(b"\xef\xbb\xbfabc") == (b"\xef\xbb\xbf", "UTF-8")


def test_table_is_longest_first():
    lengths = [len(bom) for bom, _ in BOMS]
    assert lengths == sorted(lengths, reverse=True)
