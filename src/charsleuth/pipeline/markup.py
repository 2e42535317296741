"""Input filter: HTML/XML tag stripping.

Markup syntax is plain ASCII that looks the same in every encoding, so a
page that is mostly tags drowns out the few bytes that actually say
something about the charset.  Stripping the tags before statistical
scoring keeps the evidence that matters.
"""

from __future__ import annotations


def strip_tags(data: bytes) -> bytes:
    """Return a copy of *data* with every ``<...>`` span removed.

    The delimiters go with the tag.  A ``<`` that is never closed drops
    everything after it.  The input is never modified.  When nothing but
    whitespace survives, *data* is returned unchanged so there is still
    something to score.

    :param data: The raw byte data.
    :returns: The filtered bytes.
    """
    if b"<" not in data:
        return data

    kept: list[bytes] = []
    pos = 0
    length = len(data)
    while pos < length:
        start = data.find(b"<", pos)
        if start == -1:
            kept.append(data[pos:])
            break
        kept.append(data[pos:start])
        end = data.find(b">", start + 1)
        if end == -1:
            break
        pos = end + 1

    filtered = b"".join(kept)
    if not filtered.strip():
        return data
    return filtered
