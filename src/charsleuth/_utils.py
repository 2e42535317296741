"""Internal shared utilities for charsleuth."""

from __future__ import annotations

from charsleuth.errors import InvalidInputError

#: Default maximum number of leading bytes to examine during detection.
DEFAULT_MAX_BYTES: int = 200_000


def _coerce_buffer(data: object) -> bytes:
    """Return *data* as ``bytes`` or raise :class:`InvalidInputError`.

    ``bytes``, ``bytearray`` and ``memoryview`` are accepted.  A ``str`` is
    rejected explicitly: it has already been decoded, so there is nothing
    left to detect.
    """
    if isinstance(data, bytes):
        return data
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    msg = f"expected a bytes-like buffer, got {type(data).__name__}"
    raise InvalidInputError(msg)


def _validate_hint(hint: object) -> str | None:
    """Raise :class:`InvalidInputError` unless *hint* is a string or ``None``."""
    if hint is None or isinstance(hint, str):
        return hint
    msg = f"encoding hint must be a str or None, got {type(hint).__name__}"
    raise InvalidInputError(msg)


def _validate_max_bytes(max_bytes: int | None) -> None:
    """Raise ValueError if *max_bytes* is neither ``None`` nor a positive integer."""
    if max_bytes is None:
        return
    if isinstance(max_bytes, bool) or not isinstance(max_bytes, int) or max_bytes < 1:
        msg = "max_bytes must be a positive integer or None"
        raise ValueError(msg)
