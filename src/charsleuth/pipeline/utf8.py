"""UTF-8 structural scoring."""

from __future__ import annotations

from charsleuth.pipeline import Score


def count_utf8_sequences(data: bytes) -> tuple[int, int]:
    """Count well-formed multi-byte sequences and invalid bytes in *data*.

    Overlong forms, UTF-16 surrogates and code points above U+10FFFF are
    invalid.  A sequence cut off by the end of the buffer is neither.

    :param data: The raw byte data to examine.
    :returns: ``(valid, invalid)``.
    """
    valid = 0
    invalid = 0
    i = 0
    length = len(data)

    while i < length:
        byte = data[i]

        if byte < 0x80:
            i += 1
            continue

        # 0xC0-0xC1 are overlong 2-byte encodings of ASCII, so we start at 0xC2.
        if 0xC2 <= byte <= 0xDF:
            seq_len = 2
        elif 0xE0 <= byte <= 0xEF:
            seq_len = 3
        elif 0xF0 <= byte <= 0xF4:
            seq_len = 4
        else:
            invalid += 1
            i += 1
            continue

        # Second-byte range narrows for leads that could encode overlongs,
        # surrogates or values past U+10FFFF.
        low, high = 0x80, 0xBF
        if byte == 0xE0:
            low = 0xA0
        elif byte == 0xED:
            high = 0x9F
        elif byte == 0xF0:
            low = 0x90
        elif byte == 0xF4:
            high = 0x8F

        end = min(i + seq_len, length)
        j = i + 1
        while j < end:
            b = data[j]
            if j == i + 1:
                ok = low <= b <= high
            else:
                ok = 0x80 <= b <= 0xBF
            if not ok:
                break
            j += 1

        if j == i + seq_len:
            valid += 1
            i = j
        elif j == length:
            # Truncated final sequence, e.g. from max_bytes slicing.
            break
        else:
            invalid += 1
            i += 1

    return valid, invalid


def score_utf8(data: bytes) -> Score:
    """Score *data* as UTF-8.

    Mostly-valid multi-byte content scores high; pure 7-bit content scores
    low but non-zero, since it is valid UTF-8 without being evidence for it.
    """
    valid, invalid = count_utf8_sequences(data)
    if invalid == 0:
        if valid > 3:
            return Score(100)
        if valid > 0:
            return Score(80)
        return Score(15)
    if valid > invalid * 10:
        return Score(25, clean=False)
    return Score(0, clean=False)
