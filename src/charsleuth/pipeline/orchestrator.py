"""Pipeline orchestrator: scores every charset profile and ranks the results."""

from __future__ import annotations

import logging

from charsleuth._utils import DEFAULT_MAX_BYTES
from charsleuth.equivalences import resolve_hint
from charsleuth.models import ProfileSet, load_profile_set
from charsleuth.pipeline import MAX_CONFIDENCE, Match, PipelineContext, Score
from charsleuth.pipeline.bom import detect_bom
from charsleuth.pipeline.escape import score_iso2022
from charsleuth.pipeline.markup import strip_tags
from charsleuth.pipeline.statistical import score_ngrams
from charsleuth.pipeline.structural import score_multibyte
from charsleuth.pipeline.utf8 import score_utf8
from charsleuth.pipeline.utf1632 import score_utf16, score_utf32
from charsleuth.registry import EncodingInfo

logger = logging.getLogger(__name__)

#: Confidence added to a hinted candidate that scored cleanly.
HINT_BONUS = 3


def score_profile(
    data: bytes, enc: EncodingInfo, profile_set: ProfileSet, ctx: PipelineContext
) -> Score:
    """Score *data* against a single profile with the scorer it names."""
    scorer = enc.scorer
    if scorer == "utf-8":
        return score_utf8(data)
    if scorer == "utf-16":
        return score_utf16(data, enc.python_codec, ctx)
    if scorer == "utf-32":
        return score_utf32(data, enc.python_codec)
    if scorer == "iso-2022":
        return score_iso2022(data, enc, ctx)
    if not enc.is_multibyte:
        return score_ngrams(
            data,
            enc,
            profile_set.byte_maps[enc.name],
            profile_set.trigrams[enc.name],
            ctx,
        )
    return score_multibyte(
        data, enc, profile_set.common_chars.get(enc.name, frozenset()), ctx
    )


def run_pipeline(
    data: bytes,
    hint: str | None = None,
    strip: bool = False,
    max_bytes: int | None = DEFAULT_MAX_BYTES,
    profile_set: ProfileSet | None = None,
) -> list[Match]:
    """Score *data* against every charset profile and rank the candidates.

    Candidates are ordered by confidence, then by whether the hint named
    them, then by registry order.  Zero-confidence candidates are dropped.

    :param data: The raw byte data to analyze.
    :param hint: Encoding the caller believes the data is in, if any.
    :param strip: Remove markup tags before scoring.
    :param max_bytes: Maximum number of leading bytes to examine, or
        ``None`` for all of them.
    :param profile_set: Profiles to score against.  Defaults to the shared
        bundled set.
    :returns: The ranked text matches; empty when nothing fits.
    """
    if max_bytes is not None:
        data = data[:max_bytes]
    if not data:
        return []

    bom_match = detect_bom(data)
    if bom_match is not None:
        logger.debug("byte order mark found: %s", bom_match.encoding)
        return [bom_match]

    if strip:
        data = strip_tags(data)
    if profile_set is None:
        profile_set = load_profile_set()

    hinted: frozenset[str] = frozenset()
    if hint:
        hinted = resolve_hint(hint, profile_set.profiles)
        if not hinted:
            logger.debug("ignoring encoding hint %r: no matching profile", hint)

    ctx = PipelineContext()
    ranked: list[tuple[int, int, int, Match]] = []
    # Hinted profiles are scored first.  Ranking does not depend on this.
    ordered = sorted(
        enumerate(profile_set.profiles), key=lambda item: item[1].name not in hinted
    )
    for position, enc in ordered:
        score = score_profile(data, enc, profile_set, ctx)
        is_hinted = enc.name in hinted
        if score.confidence <= 0:
            if is_hinted:
                logger.debug("hinted encoding %s does not fit the data", enc.name)
            continue
        confidence = score.confidence
        if is_hinted and score.clean:
            confidence = min(confidence + HINT_BONUS, MAX_CONFIDENCE)
        ranked.append(
            (
                -confidence,
                0 if is_hinted else 1,
                position,
                Match.text(enc.name, confidence, score.language),
            )
        )

    ranked.sort(key=lambda item: item[:3])
    return [item[3] for item in ranked]


def detect_best(
    data: bytes,
    hint: str | None = None,
    strip: bool = False,
    max_bytes: int | None = DEFAULT_MAX_BYTES,
    profile_set: ProfileSet | None = None,
) -> Match | None:
    """Return the top-ranked text match for *data*, or ``None``."""
    matches = run_pipeline(data, hint, strip, max_bytes, profile_set)
    return matches[0] if matches else None
