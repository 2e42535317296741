"""Enumerations for charsleuth."""

import enum


class MatchType(str, enum.Enum):
    """Whether a buffer was classified as binary content or as text."""

    BINARY = "binary"
    TEXT = "text"

    def __str__(self) -> str:
        return self.value


class ProfileKind(enum.Enum):
    """How a charset profile recognises its encoding."""

    SINGLE_BYTE = "single-byte"
    MULTI_BYTE = "multi-byte"
    UNICODE_BOM = "unicode-bom"
