"""Stage 1: BOM (Byte Order Mark) detection."""

from __future__ import annotations

from charsleuth.pipeline import MAX_CONFIDENCE, Match

# Ordered longest-first so UTF-32 is checked before UTF-16
# (UTF-32LE BOM starts with the same bytes as UTF-16LE BOM)
BOMS: tuple[tuple[bytes, str], ...] = (
    (b"\x00\x00\xfe\xff", "UTF-32BE"),
    (b"\xff\xfe\x00\x00", "UTF-32LE"),
    (b"\xef\xbb\xbf", "UTF-8"),
    (b"\xfe\xff", "UTF-16BE"),
    (b"\xff\xfe", "UTF-16LE"),
)

_UTF32_BOMS: frozenset[bytes] = frozenset({b"\x00\x00\xfe\xff", b"\xff\xfe\x00\x00"})


def find_bom(data: bytes) -> tuple[bytes, str] | None:
    """Return the ``(bom, encoding)`` pair *data* starts with, or ``None``."""
    for bom_bytes, encoding in BOMS:
        if data.startswith(bom_bytes):
            # FF FE 00 00 also starts with the UTF-16LE BOM.  Only treat it
            # as UTF-32 when the payload is a whole number of 4-byte units.
            if bom_bytes in _UTF32_BOMS and (len(data) - len(bom_bytes)) % 4 != 0:
                continue
            return bom_bytes, encoding
    return None


def detect_bom(data: bytes) -> Match | None:
    """Check for a BOM at the start of data. Returns a match or None."""
    found = find_bom(data)
    if found is None:
        return None
    return Match.text(found[1], MAX_CONFIDENCE)
