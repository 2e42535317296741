# tests/test_orchestrator.py
from __future__ import annotations

from conftest import (
    CHINESE_SIMPLIFIED,
    CHINESE_TRADITIONAL,
    ENGLISH,
    GERMAN,
    JAPANESE,
    KOREAN,
    RUSSIAN,
)

from charsleuth.pipeline import Match
from charsleuth.pipeline.orchestrator import HINT_BONUS, detect_best, run_pipeline


def test_empty_input():
    assert run_pipeline(b"") == []
    assert detect_best(b"") is None


def test_bom_short_circuits():
    assert run_pipeline(b"\xef\xbb\xbfHello") == [Match.text("UTF-8", 100)]


def test_ascii_english():
    results = run_pipeline(ENGLISH)
    assert results[0].encoding == "ISO-8859-1"
    assert results[0].language == "en"
    assert results[1].encoding == "windows-1252"
    assert results[0].confidence == results[1].confidence


def test_results_are_sorted_and_nonzero():
    results = run_pipeline(GERMAN.encode("latin-1"))
    confidences = [r.confidence for r in results]
    assert confidences == sorted(confidences, reverse=True)
    assert all(c > 0 for c in confidences)


def test_german_latin1():
    top = detect_best(GERMAN.encode("latin-1"))
    assert top.encoding == "ISO-8859-1"
    assert top.language == "de"


def test_german_utf8():
    top = detect_best(GERMAN.encode("utf-8"))
    assert top == Match.text("UTF-8", 100)


def test_russian_windows_1251():
    top = detect_best(RUSSIAN.encode("cp1251"))
    assert top.encoding == "windows-1251"
    assert top.language == "ru"


def test_japanese_shift_jis():
    top = detect_best(JAPANESE.encode("shift_jis"))
    assert top.encoding == "Shift_JIS"
    assert top.language == "ja"


def test_chinese_gb18030():
    assert detect_best(CHINESE_SIMPLIFIED.encode("gb18030")).encoding == "GB18030"


def test_chinese_big5():
    assert detect_best(CHINESE_TRADITIONAL.encode("big5")).encoding == "Big5"


def test_korean_euc_kr():
    results = run_pipeline(KOREAN.encode("euc_kr"))
    by_name = {r.encoding: r for r in results}
    assert by_name["EUC-KR"].confidence == 100
    assert by_name["EUC-KR"].language == "ko"


def test_iso2022jp():
    data = "これは日本語です。 Hello テストです。 world 今日は良い天気。 end"
    top = detect_best(data.encode("iso2022_jp"))
    assert top.encoding == "ISO-2022-JP"
    assert top.language == "ja"


def test_utf16le_without_bom():
    top = detect_best("Hello, world! This is UTF-16.".encode("utf-16-le"))
    assert top.encoding == "UTF-16LE"


def test_hint_breaks_a_tie():
    data = GERMAN.encode("latin-1")
    plain = run_pipeline(data)
    hinted = run_pipeline(data, hint="windows-1252")
    assert plain[0].encoding == "ISO-8859-1"
    assert hinted[0].encoding == "windows-1252"
    windows = next(r for r in plain if r.encoding == "windows-1252")
    assert hinted[0].confidence == min(windows.confidence + HINT_BONUS, 100)


def test_hint_cannot_revive_a_ruled_out_encoding():
    results = run_pipeline(GERMAN.encode("latin-1"), hint="utf-8")
    assert "UTF-8" not in {r.encoding for r in results}


def test_unknown_hint_is_ignored():
    data = GERMAN.encode("latin-1")
    assert run_pipeline(data, hint="klingon-8") == run_pipeline(data)


def test_max_bytes_truncates():
    data = ENGLISH + " Grüße aus München, schöne Größe".encode()
    full = detect_best(data)
    cut = detect_best(data, max_bytes=len(ENGLISH))
    assert full == Match.text("UTF-8", 100)
    assert cut.encoding == "ISO-8859-1"


def test_strip_changes_the_view():
    markup = b'<div class="container"><span style="color: red">' * 20
    data = markup + GERMAN.encode("latin-1") + b"</span></div>" * 20
    assert run_pipeline(data, strip=True) != run_pipeline(data, strip=False)


def test_c1_bytes_prefer_windows_table():
    data = ("„" + GERMAN + "“ – sagte er.").encode("cp1252")
    results = run_pipeline(data)
    names = [r.encoding for r in results]
    assert "ISO-8859-1" not in names
    assert results[0].encoding == "windows-1252"


def test_strip_removes_non_ascii_attribute_values():
    tag = b'<img alt="' + RUSSIAN.encode("cp1251") + b'">'
    data = tag * 5 + GERMAN.encode("latin-1")
    stripped = run_pipeline(data, strip=True)
    assert stripped[0].encoding == "ISO-8859-1"
    assert stripped[0].language == "de"
    assert run_pipeline(data)[0].encoding != "ISO-8859-1"


def test_iso2022kr():
    top = detect_best(KOREAN.encode("iso2022_kr"))
    assert top.encoding == "ISO-2022-KR"
    assert top.language == "ko"
