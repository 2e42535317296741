"""CJK multi-byte scoring (Shift_JIS, EUC-JP, EUC-KR, GB18030, Big5).

Each encoding gets a character-length function describing its byte grammar.
A single walk over the data counts characters, multi-byte characters,
characters that break the grammar, and multi-byte characters that are among
the language's most frequent.  Confidence grows with the share of frequent
characters and collapses as grammar violations pile up.
"""

from __future__ import annotations

import dataclasses
import math
from collections.abc import Callable

from charsleuth.pipeline import NO_MATCH, PipelineContext, Score
from charsleuth.pipeline.ascii import decodes_as, is_seven_bit
from charsleuth.registry import EncodingInfo

# Character-length results besides a positive byte count.
_BAD = 0
_TRUNCATED = -1

# Up to this many multi-byte characters without errors is too little to go on.
_FEW_DOUBLES = 10
_LOW_CONFIDENCE = 10
# Multi-byte characters needed per bad character to stay in the running.
_DOUBLES_PER_BAD = 20
_BAD_CHAR_CAP = 40


@dataclasses.dataclass(frozen=True, slots=True)
class MultiByteStats:
    """Counts from one walk over a buffer under one encoding's grammar."""

    chars: int = 0
    doubles: int = 0
    bad: int = 0
    common: int = 0


def _shift_jis_len(data: bytes, i: int, length: int) -> int:
    """Lead 0x81-0x9F or 0xE0-0xFC, trail 0x40-0x7E or 0x80-0xFC.

    0xA1-0xDF are single-byte half-width katakana.
    """
    b = data[i]
    if 0xA1 <= b <= 0xDF:
        return 1
    if 0x81 <= b <= 0x9F or 0xE0 <= b <= 0xFC:
        if i + 1 >= length:
            return _TRUNCATED
        trail = data[i + 1]
        if 0x40 <= trail <= 0x7E or 0x80 <= trail <= 0xFC:
            return 2
    return _BAD


def _euc_jp_len(data: bytes, i: int, length: int) -> int:
    """Two-byte 0xA1-0xFE pairs, SS2 (0x8E) katakana and SS3 (0x8F) JIS X 0212."""
    b = data[i]
    if b == 0x8E:
        size, low, high = 2, 0xA1, 0xDF
    elif b == 0x8F:
        size, low, high = 3, 0xA1, 0xFE
    elif 0xA1 <= b <= 0xFE:
        size, low, high = 2, 0xA1, 0xFE
    else:
        return _BAD
    if i + size > length:
        return _TRUNCATED
    for j in range(i + 1, i + size):
        if not low <= data[j] <= high:
            return _BAD
    return size


def _euc_kr_len(data: bytes, i: int, length: int) -> int:
    """Lead and trail both 0xA1-0xFE."""
    if not 0xA1 <= data[i] <= 0xFE:
        return _BAD
    if i + 1 >= length:
        return _TRUNCATED
    return 2 if 0xA1 <= data[i + 1] <= 0xFE else _BAD


def _gb18030_len(data: bytes, i: int, length: int) -> int:
    """Lead 0x81-0xFE; trail 0x40-0x7E/0x80-0xFE, or a digit starting a 4-byte form."""
    if not 0x81 <= data[i] <= 0xFE:
        return _BAD
    if i + 1 >= length:
        return _TRUNCATED
    second = data[i + 1]
    if 0x40 <= second <= 0x7E or 0x80 <= second <= 0xFE:
        return 2
    if 0x30 <= second <= 0x39:
        if i + 3 >= length:
            return _TRUNCATED
        if 0x81 <= data[i + 2] <= 0xFE and 0x30 <= data[i + 3] <= 0x39:
            return 4
    return _BAD


def _big5_len(data: bytes, i: int, length: int) -> int:
    """Lead 0xA1-0xF9, trail 0x40-0x7E or 0xA1-0xFE."""
    if not 0xA1 <= data[i] <= 0xF9:
        return _BAD
    if i + 1 >= length:
        return _TRUNCATED
    trail = data[i + 1]
    return 2 if 0x40 <= trail <= 0x7E or 0xA1 <= trail <= 0xFE else _BAD


_CHAR_LENGTHS: dict[str, Callable[[bytes, int, int], int]] = {
    "shift_jis": _shift_jis_len,
    "euc-jp": _euc_jp_len,
    "euc-kr": _euc_kr_len,
    "gb18030": _gb18030_len,
    "big5": _big5_len,
}


def analyze_multibyte(
    data: bytes, scorer: str, common: frozenset[int] = frozenset()
) -> MultiByteStats:
    """Walk *data* with the byte grammar named by *scorer*.

    A bad byte counts as one bad character and scanning resumes at the next
    byte.  A character cut off by the end of the buffer is not counted.

    :param data: The raw byte data to examine.
    :param scorer: A key of the grammar table, e.g. ``"shift_jis"``.
    :param common: Frequent multi-byte characters as big-endian integers.
    """
    char_len = _CHAR_LENGTHS[scorer]
    chars = doubles = bad = hits = 0
    i = 0
    length = len(data)
    while i < length:
        if data[i] < 0x80:
            chars += 1
            i += 1
            continue
        size = char_len(data, i, length)
        if size == _TRUNCATED:
            break
        chars += 1
        if size == _BAD:
            bad += 1
            i += 1
            continue
        if size > 1:
            doubles += 1
            if int.from_bytes(data[i : i + size], "big") in common:
                hits += 1
        i += size
    return MultiByteStats(chars=chars, doubles=doubles, bad=bad, common=hits)


def multibyte_confidence(stats: MultiByteStats, has_common_list: bool = True) -> int:
    """Turn walk counts into a 0..100 confidence."""
    if stats.doubles <= _FEW_DOUBLES and stats.bad == 0:
        if stats.doubles == 0 and stats.chars < 10:
            return 0
        return _LOW_CONFIDENCE
    if stats.doubles < _DOUBLES_PER_BAD * stats.bad:
        return 0
    if has_common_list:
        max_val = math.log(stats.doubles / 4)
        confidence = int(math.log(stats.common + 1) * 90 / max_val + 10)
    else:
        confidence = 30 + stats.doubles - _DOUBLES_PER_BAD * stats.bad
    confidence = min(confidence, 100)
    if stats.bad:
        confidence = min(confidence, _BAD_CHAR_CAP)
    return max(confidence, 0)


def score_multibyte(
    data: bytes,
    enc: EncodingInfo,
    common: frozenset[int],
    ctx: PipelineContext,
) -> Score:
    """Score *data* against the CJK multi-byte profile *enc*.

    Pure 7-bit data is all single-byte characters in every one of these
    encodings, so the walk is skipped.  A buffer that follows the byte
    grammar but still fails to decode (unassigned code points) is treated
    as holding one bad character.
    """
    if is_seven_bit(data, ctx):
        stats = MultiByteStats(chars=len(data))
    else:
        stats = analyze_multibyte(data, enc.scorer, common)
        if stats.bad == 0 and not decodes_as(data, enc.python_codec, ctx):
            stats = dataclasses.replace(stats, bad=1)

    confidence = multibyte_confidence(stats, has_common_list=bool(common))
    if confidence <= 0:
        return NO_MATCH
    language = enc.languages[0] if stats.doubles and enc.languages else None
    return Score(confidence, language=language, clean=stats.bad == 0)
