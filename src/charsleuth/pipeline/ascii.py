"""Byte-range facts shared by several scorers.

Each helper caches its answer on the :class:`PipelineContext` so a buffer is
only scanned once per call however many profiles ask.
"""

from __future__ import annotations

from charsleuth.pipeline import PipelineContext

# bytes.translate deletes these; whatever remains is outside the range.
_SEVEN_BIT: bytes = bytes(range(0x80))
_C1_BYTES: bytes = bytes(range(0x80, 0xA0))

# UnicodeDecodeError reasons raised for a character cut off at the end.
_TRUNCATION_REASONS: frozenset[str] = frozenset(
    {"unexpected end of data", "incomplete multibyte sequence", "truncated data"}
)


def count_non_ascii(data: bytes, ctx: PipelineContext) -> int:
    """Return the number of bytes in *data* with the high bit set."""
    if ctx.non_ascii_count < 0:
        ctx.non_ascii_count = len(data.translate(None, _SEVEN_BIT))
    return ctx.non_ascii_count


def is_seven_bit(data: bytes, ctx: PipelineContext) -> bool:
    """Return True if *data* holds no byte above 0x7F."""
    return count_non_ascii(data, ctx) == 0


def has_c1_bytes(data: bytes, ctx: PipelineContext) -> bool:
    """Return True if *data* contains any byte in 0x80-0x9F."""
    if ctx.has_c1 is None:
        if is_seven_bit(data, ctx):
            ctx.has_c1 = False
        else:
            remaining = data.translate(None, _SEVEN_BIT)
            ctx.has_c1 = len(remaining.translate(None, _C1_BYTES)) < len(remaining)
    return ctx.has_c1


def decodes_as(data: bytes, codec: str, ctx: PipelineContext) -> bool:
    """Return True if *data* decodes under *codec* without errors.

    A trailing incomplete character is tolerated, since the buffer may have
    been cut at ``max_bytes``.
    """
    cached = ctx.decodes.get(codec)
    if cached is not None:
        return cached
    try:
        data.decode(codec)
        ok = True
    except UnicodeDecodeError as e:
        # Decoding stops at the first error, so everything before a
        # truncation at the very end was fine.
        ok = e.end == len(data) and e.reason in _TRUNCATION_REASONS
    ctx.decodes[codec] = ok
    return ok
