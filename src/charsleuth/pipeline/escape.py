"""Scoring of escape-sequence based encodings (ISO-2022-JP, ISO-2022-KR).

These encodings are 7-bit: they switch character sets with ESC (0x1B)
sequences, and ISO-2022-KR additionally with SO/SI (0x0E/0x0F) shifts.
Evidence is the ratio of escape sequences the encoding defines to those it
does not.
"""

from __future__ import annotations

from charsleuth.pipeline import NO_MATCH, PipelineContext, Score
from charsleuth.pipeline.ascii import decodes_as
from charsleuth.registry import EncodingInfo

_ESC = 0x1B
_SO = 0x0E
_SI = 0x0F

ESCAPE_SEQUENCES: dict[str, tuple[bytes, ...]] = {
    "ISO-2022-JP": (
        b"\x1b$(C",  # KS X 1001
        b"\x1b$(D",  # JIS X 0212
        b"\x1b$@",  # JIS C 6226-1978
        b"\x1b$A",  # GB 2312
        b"\x1b$B",  # JIS X 0208
        b"\x1b&@",  # JIS X 0208-1990 update
        b"\x1b(B",  # ASCII
        b"\x1b(H",  # JIS-Roman (deprecated)
        b"\x1b(I",  # JIS X 0201 katakana
        b"\x1b(J",  # JIS X 0201 Roman
        b"\x1b.A",  # ISO-8859-1 upper half
        b"\x1b.F",  # ISO-8859-7 upper half
    ),
    "ISO-2022-KR": (b"\x1b$)C",),
}

# Fewer hits plus shifts than this are weak evidence and cost confidence.
_EXPECTED_EVIDENCE = 5
_SHORTFALL_PENALTY = 10


def count_escapes(data: bytes, sequences: tuple[bytes, ...]) -> tuple[int, int, int]:
    """Count known escapes, unknown escapes and SO/SI shifts in *data*.

    :returns: ``(hits, misses, shifts)``.
    """
    hits = 0
    misses = 0
    shifts = 0
    i = 0
    length = len(data)
    while i < length:
        byte = data[i]
        if byte == _ESC:
            for seq in sequences:
                if data.startswith(seq, i):
                    hits += 1
                    i += len(seq)
                    break
            else:
                misses += 1
                i += 1
            continue
        if byte in (_SO, _SI):
            shifts += 1
        i += 1
    return hits, misses, shifts


def score_iso2022(data: bytes, enc: EncodingInfo, ctx: PipelineContext) -> Score:
    """Score *data* as the ISO-2022 variant *enc*.

    :param data: The raw byte data to examine.
    :param enc: Registry entry whose name is a key of :data:`ESCAPE_SEQUENCES`.
    :param ctx: Per-call pipeline state.
    """
    if _ESC not in data:
        return NO_MATCH
    hits, misses, shifts = count_escapes(data, ESCAPE_SEQUENCES[enc.name])
    if hits == 0:
        return NO_MATCH

    confidence = (100 * hits - 100 * misses) // (hits + misses)
    if hits + shifts < _EXPECTED_EVIDENCE:
        confidence -= (_EXPECTED_EVIDENCE - hits - shifts) * _SHORTFALL_PENALTY
    if confidence <= 0 or not decodes_as(data, enc.python_codec, ctx):
        return NO_MATCH
    language = enc.languages[0] if enc.languages else None
    return Score(confidence, language=language, clean=misses == 0)
