"""Encoding name normalisation and hint resolution.

Callers name encodings in many ways (``"latin1"``, ``"ISO_8859-1"``,
``"CP1252"``).  Names are compared through Python's codec registry so that
every alias of a codec resolves to the same profile.
"""

from __future__ import annotations

import codecs
from collections.abc import Iterable

from charsleuth.registry import EncodingInfo


def normalize_encoding_name(name: str) -> str:
    """Normalize encoding name for comparison."""
    try:
        return codecs.lookup(name).name
    except LookupError:
        return name.lower().replace("-", "").replace("_", "")


def is_known_encoding(name: str) -> bool:
    """Return True if Python has a codec called *name*."""
    try:
        codecs.lookup(name)
    except LookupError:
        return False
    return True


# Encodings without a profile of their own, mapped to the profiled
# encodings that can represent every byte sequence they produce.
SUPERSETS: dict[str, frozenset[str]] = {
    "ascii": frozenset({"utf-8", "cp1252"}),
    "gb2312": frozenset({"gb18030"}),
    "gbk": frozenset({"gb18030"}),
    "utf-16": frozenset({"utf-16-be", "utf-16-le"}),
    "utf-32": frozenset({"utf-32-be", "utf-32-le"}),
}

_NORMALIZED_SUPERSETS: dict[str, frozenset[str]] = {
    normalize_encoding_name(subset): frozenset(
        normalize_encoding_name(s) for s in supersets
    )
    for subset, supersets in SUPERSETS.items()
}


def resolve_hint(hint: str, profiles: Iterable[EncodingInfo]) -> frozenset[str]:
    """Return the names of the profiles an encoding hint refers to.

    A hint naming a profiled encoding (under any alias) selects that
    profile.  A hint naming an encoding that has no profile selects the
    profiles listed as its supersets.  Anything else selects nothing.

    :param hint: The caller's encoding name.
    :param profiles: The profiles to choose from.
    """
    if not is_known_encoding(hint):
        return frozenset()
    wanted = normalize_encoding_name(hint)
    by_codec: dict[str, list[str]] = {}
    for enc in profiles:
        by_codec.setdefault(normalize_encoding_name(enc.python_codec), []).append(
            enc.name
        )
    if wanted in by_codec:
        return frozenset(by_codec[wanted])
    selected: set[str] = set()
    for codec in _NORMALIZED_SUPERSETS.get(wanted, ()):
        selected.update(by_codec.get(codec, ()))
    return frozenset(selected)
