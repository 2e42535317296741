"""UTF-16/UTF-32 scoring for data without a BOM.

A BOM settles the question before any scorer runs, so these only see
BOM-less buffers.  UTF-16 is judged from the leading code units, where
Latin text shows up as units with a zero high byte.  UTF-32 is judged from
every complete unit, since almost no 4-byte pattern is a valid code point.
"""

from __future__ import annotations

from charsleuth.pipeline import NO_MATCH, PipelineContext, Score
from charsleuth.pipeline.ascii import decodes_as

# Leading code units examined for UTF-16.
_UTF16_SAMPLE_UNITS = 32

_UTF16_BASE_CONFIDENCE = 10
_UTF16_STEP = 10


def _plausible_utf16_unit(unit: int) -> bool:
    return unit in (0x09, 0x0A, 0x0D) or 0x20 <= unit <= 0xFF


def score_utf16(data: bytes, codec: str, ctx: PipelineContext) -> Score:
    """Score *data* as BOM-less UTF-16 in the byte order of *codec*.

    :param data: The raw byte data to examine.
    :param codec: ``"utf-16-be"`` or ``"utf-16-le"``.
    :param ctx: Per-call pipeline state.
    """
    if len(data) < 4:
        return NO_MATCH

    big_endian = codec.endswith("be")
    confidence = _UTF16_BASE_CONFIDENCE
    plausible = 0
    limit = min(len(data) // 2, _UTF16_SAMPLE_UNITS) * 2
    for i in range(0, limit, 2):
        if big_endian:
            unit = (data[i] << 8) | data[i + 1]
        else:
            unit = (data[i + 1] << 8) | data[i]
        if unit == 0:
            confidence -= _UTF16_STEP
            if confidence <= 0:
                return NO_MATCH
        elif _plausible_utf16_unit(unit):
            plausible += 1
            confidence += _UTF16_STEP
            if confidence >= 100:
                confidence = 100
                break

    if not plausible or not decodes_as(data, codec, ctx):
        return NO_MATCH
    return Score(confidence)


def count_utf32_units(data: bytes, big_endian: bool) -> tuple[int, int]:
    """Count valid and invalid 4-byte code units in *data*.

    A trailing partial unit is ignored.  NUL, surrogates and anything past
    U+10FFFF are invalid.

    :returns: ``(valid, invalid)``.
    """
    byteorder = "big" if big_endian else "little"
    valid = 0
    invalid = 0
    for i in range(0, len(data) - 3, 4):
        cp = int.from_bytes(data[i : i + 4], byteorder)
        if cp == 0 or cp > 0x10FFFF or 0xD800 <= cp <= 0xDFFF:
            invalid += 1
        else:
            valid += 1
    return valid, invalid


def score_utf32(data: bytes, codec: str) -> Score:
    """Score *data* as BOM-less UTF-32 in the byte order of *codec*."""
    valid, invalid = count_utf32_units(data, big_endian=codec.endswith("be"))
    if invalid == 0:
        if valid > 3:
            return Score(100)
        if valid > 0:
            return Score(80)
        return NO_MATCH
    if valid > invalid * 10:
        return Score(25, clean=False)
    return NO_MATCH
