# tests/test_equivalences.py
from __future__ import annotations

from charsleuth.equivalences import (
    is_known_encoding,
    normalize_encoding_name,
    resolve_hint,
)
from charsleuth.registry import REGISTRY


def test_normalize_aliases_agree():
    assert normalize_encoding_name("latin1") == normalize_encoding_name("ISO-8859-1")
    assert normalize_encoding_name("CP1252") == normalize_encoding_name(
        "windows-1252"
    )


def test_normalize_unknown_name():
    assert normalize_encoding_name("Made_Up-Name") == "madeupname"


def test_is_known_encoding():
    assert is_known_encoding("utf-8")
    assert is_known_encoding("SJIS")
    assert not is_known_encoding("klingon-8")


def test_hint_selects_profile_by_alias():
    assert resolve_hint("latin1", REGISTRY) == frozenset({"ISO-8859-1"})
    assert resolve_hint("cp1252", REGISTRY) == frozenset({"windows-1252"})
    assert resolve_hint("sjis", REGISTRY) == frozenset({"Shift_JIS"})
    assert resolve_hint("UTF8", REGISTRY) == frozenset({"UTF-8"})


def test_hint_for_subset_selects_supersets():
    assert resolve_hint("ascii", REGISTRY) == frozenset({"UTF-8", "windows-1252"})
    assert resolve_hint("gb2312", REGISTRY) == frozenset({"GB18030"})
    assert resolve_hint("GBK", REGISTRY) == frozenset({"GB18030"})
    assert resolve_hint("utf-16", REGISTRY) == frozenset({"UTF-16BE", "UTF-16LE"})


def test_unknown_hint_selects_nothing():
    assert resolve_hint("klingon-8", REGISTRY) == frozenset()


def test_known_codec_without_profile_selects_nothing():
    assert resolve_hint("cp437", REGISTRY) == frozenset()
