"""Binary/text content sniffing and character encoding detection."""

from __future__ import annotations

from charsleuth._utils import DEFAULT_MAX_BYTES
from charsleuth.detector import DetectorConfig, EncodingDetector
from charsleuth.enums import MatchType
from charsleuth.errors import (
    CharsleuthError,
    ClassificationError,
    InvalidInputError,
    LoadError,
    NoCandidateError,
)
from charsleuth.pipeline import Match

__version__ = "1.0.0"
__all__ = [
    "CharsleuthError",
    "ClassificationError",
    "DetectorConfig",
    "EncodingDetector",
    "InvalidInputError",
    "LoadError",
    "Match",
    "MatchType",
    "NoCandidateError",
    "detect",
    "detect_all",
    "supported_encodings",
]


def detect(
    data: bytes | bytearray | memoryview,
    hint: str | None = None,
    strip_tags: bool = False,
    max_bytes: int | None = DEFAULT_MAX_BYTES,
) -> Match:
    """Return the best match for *data* using a throwaway detector.

    See :meth:`EncodingDetector.detect`.
    """
    detector = EncodingDetector(strip_tags=strip_tags, max_bytes=max_bytes)
    return detector.detect(data, hint)


def detect_all(
    data: bytes | bytearray | memoryview,
    hint: str | None = None,
    strip_tags: bool = False,
    max_bytes: int | None = DEFAULT_MAX_BYTES,
) -> list[Match]:
    """Return every plausible match for *data*, best first.

    See :meth:`EncodingDetector.detect_all`.
    """
    detector = EncodingDetector(strip_tags=strip_tags, max_bytes=max_bytes)
    return detector.detect_all(data, hint)


def supported_encodings() -> list[str]:
    """Return the name of every encoding a match can report."""
    return EncodingDetector.supported_encodings()
