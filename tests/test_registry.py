# tests/test_registry.py
from __future__ import annotations

import codecs

from conftest import profile

from charsleuth.enums import ProfileKind
from charsleuth.registry import REGISTRY


def test_names_are_unique():
    names = [e.name for e in REGISTRY]
    assert len(names) == len(set(names))


def test_every_codec_exists():
    for enc in REGISTRY:
        codecs.lookup(enc.python_codec)


def test_iso_tables_precede_their_windows_supersets():
    names = [e.name for e in REGISTRY]
    for iso, win in [
        ("ISO-8859-1", "windows-1252"),
        ("ISO-8859-2", "windows-1250"),
        ("ISO-8859-5", "windows-1251"),
        ("ISO-8859-6", "windows-1256"),
        ("ISO-8859-7", "windows-1253"),
        ("ISO-8859-8", "windows-1255"),
        ("ISO-8859-9", "windows-1254"),
    ]:
        assert names.index(iso) < names.index(win)


def test_only_iso_tables_have_c1_controls():
    for enc in REGISTRY:
        assert enc.c1_controls == enc.name.startswith("ISO-8859-")


def test_single_byte_profiles_have_languages():
    for enc in REGISTRY:
        if enc.kind is ProfileKind.SINGLE_BYTE:
            assert enc.languages


def test_properties():
    assert profile("UTF-8").is_multibyte
    assert profile("UTF-8").is_ascii_compatible
    assert not profile("KOI8-R").is_multibyte
    assert not profile("UTF-16LE").is_ascii_compatible
    assert not profile("ISO-2022-JP").is_ascii_compatible
    assert profile("UTF-32BE").kind is ProfileKind.UNICODE_BOM


def test_unicode_profiles_come_first():
    assert [e.name for e in REGISTRY[:5]] == [
        "UTF-8",
        "UTF-16BE",
        "UTF-16LE",
        "UTF-32BE",
        "UTF-32LE",
    ]


def test_single_byte_profiles_are_ascii_compatible():
    for enc in REGISTRY:
        if not enc.is_multibyte:
            assert enc.is_ascii_compatible, enc.name
