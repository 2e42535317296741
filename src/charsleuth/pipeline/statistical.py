"""Single-byte scoring by character-trigram frequency.

Bytes are folded through a per-encoding table (letters to lowercase,
everything else to a space, runs of spaces collapsed) and the resulting
trigrams are compared against each language's list of frequent trigrams.
The share of trigrams found in the list is the evidence.
"""

from __future__ import annotations

import re
from collections import Counter

from charsleuth.pipeline import NO_MATCH, PipelineContext, Score
from charsleuth.pipeline.ascii import decodes_as, has_c1_bytes, is_seven_bit
from charsleuth.registry import EncodingInfo

#: Leading bytes of the analysed view that are folded into trigrams.
NGRAM_SAMPLE_SIZE = 8000

#: Least confidence of an ASCII-compatible single-byte profile on 7-bit data.
ASCII_FLOOR = 10

_HIT_RATIO_CEILING = 0.33
_CEILING_CONFIDENCE = 98
_RATIO_SCALE = 300

_SPACE_RUNS = re.compile(rb" {2,}")


def trigram_counts(data: bytes, byte_map: bytes) -> Counter[bytes]:
    """Fold the start of *data* through *byte_map* and count its trigrams.

    The folded text is padded with a space on both sides so that word
    starts and ends form trigrams of their own.
    """
    folded = _SPACE_RUNS.sub(b" ", data[:NGRAM_SAMPLE_SIZE].translate(byte_map))
    folded = folded.strip(b" ")
    if not folded:
        return Counter()
    seq = b" " + folded + b" "
    return Counter(seq[i : i + 3] for i in range(len(seq) - 2))


def ngram_confidence(hits: int, total: int) -> int:
    """Map a trigram hit count to a 0..100 confidence."""
    if total <= 0:
        return 0
    ratio = hits / total
    if ratio > _HIT_RATIO_CEILING:
        return _CEILING_CONFIDENCE
    return int(ratio * _RATIO_SCALE)


def best_language(
    counts: Counter[bytes], languages: tuple[tuple[str, frozenset[bytes]], ...]
) -> tuple[int, str | None]:
    """Return ``(confidence, language)`` for the best-matching language.

    Ties go to the language listed first.  The language is ``None`` when no
    trigram matched at all.
    """
    total = sum(counts.values())
    best = 0
    best_lang: str | None = None
    for lang, grams in languages:
        hits = sum(n for gram, n in counts.items() if gram in grams)
        confidence = ngram_confidence(hits, total)
        if confidence > best:
            best = confidence
            best_lang = lang
    return best, best_lang


def score_ngrams(
    data: bytes,
    enc: EncodingInfo,
    byte_map: bytes,
    languages: tuple[tuple[str, frozenset[bytes]], ...],
    ctx: PipelineContext,
) -> Score:
    """Score *data* against the single-byte profile *enc*.

    The profile is ruled out when the data does not decode under its codec,
    or when it is an ISO-8859 table and the data holds C1 bytes.  On 7-bit
    data every ASCII-compatible profile keeps at least :data:`ASCII_FLOOR`.
    """
    if enc.c1_controls and has_c1_bytes(data, ctx):
        return NO_MATCH
    if not decodes_as(data, enc.python_codec, ctx):
        return NO_MATCH

    confidence, language = best_language(trigram_counts(data, byte_map), languages)
    if enc.is_ascii_compatible and is_seven_bit(data, ctx):
        confidence = max(confidence, ASCII_FLOOR)
    if confidence <= 0:
        return NO_MATCH
    return Score(confidence, language=language)
