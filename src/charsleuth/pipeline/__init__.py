"""Detection pipeline stages and shared types."""

from __future__ import annotations

import dataclasses
from dataclasses import field

from charsleuth.enums import MatchType

#: Confidence reported for binary content and for byte-order marks.
MAX_CONFIDENCE: int = 100


@dataclasses.dataclass(frozen=True, slots=True)
class Match:
    """A single detection result.

    Binary matches never carry an encoding or language and are always at
    :data:`MAX_CONFIDENCE`.  Text matches always carry an encoding; the
    language is only set when the matched profile has one.
    """

    kind: MatchType
    encoding: str | None
    language: str | None
    confidence: int

    def __post_init__(self) -> None:
        if not 0 <= self.confidence <= MAX_CONFIDENCE:
            msg = f"confidence must be within 0..100, got {self.confidence}"
            raise ValueError(msg)
        if self.kind is MatchType.BINARY:
            if (
                self.encoding is not None
                or self.language is not None
                or self.confidence != MAX_CONFIDENCE
            ):
                msg = "a binary match has no encoding or language and confidence 100"
                raise ValueError(msg)
        elif not self.encoding:
            msg = "a text match requires an encoding"
            raise ValueError(msg)
        elif self.language == "":
            msg = "language must be None rather than empty"
            raise ValueError(msg)

    @classmethod
    def binary(cls) -> Match:
        """Return the match reported for binary content."""
        return cls(MatchType.BINARY, None, None, MAX_CONFIDENCE)

    @classmethod
    def text(
        cls, encoding: str, confidence: int, language: str | None = None
    ) -> Match:
        """Return a text match; an empty *language* is normalised to ``None``."""
        return cls(MatchType.TEXT, encoding, language or None, confidence)

    @property
    def is_binary(self) -> bool:
        return self.kind is MatchType.BINARY

    def to_dict(self) -> dict[str, str | int]:
        """Convert this match to a plain dict.

        :returns: A dict with ``'type'`` and ``'confidence'`` keys, plus
            ``'encoding'`` for text and ``'language'`` when one is known.
        """
        result: dict[str, str | int] = {"type": self.kind.value}
        if self.encoding is not None:
            result["encoding"] = self.encoding
        if self.language:
            result["language"] = self.language
        result["confidence"] = self.confidence
        return result


@dataclasses.dataclass(frozen=True, slots=True)
class Score:
    """What a scorer concluded about one charset profile.

    :param confidence: 0..100; zero means the profile is ruled out.
    :param language: Best-matching language, when there is evidence for one.
    :param clean: False when an invalid byte sequence was seen.
    """

    confidence: int
    language: str | None = None
    clean: bool = True


#: The score of a profile that is ruled out.
NO_MATCH = Score(0, clean=False)


@dataclasses.dataclass(slots=True)
class PipelineContext:
    """Per-run mutable state for a single pipeline invocation.

    Created once at the start of ``run_pipeline()`` and threaded through
    the scorers via function parameters.  Each concurrent detection call
    gets its own context, so nothing shared is ever written to.
    """

    non_ascii_count: int = -1
    has_c1: bool | None = None
    decodes: dict[str, bool] = field(default_factory=dict)
