"""Reference data loading and the per-encoding tables derived from it.

The bundled data is plain Unicode text: frequent trigrams per language
(``ngrams.txt``) and frequent characters per CJK writing system
(``commonchars.txt``).  Byte-level tables are derived once per process by
encoding that text with each profile's codec, so a single list serves every
encoding of a language.
"""

from __future__ import annotations

import codecs
import dataclasses
import importlib.resources
import logging
import threading

from charsleuth.errors import LoadError
from charsleuth.registry import REGISTRY, EncodingInfo

logger = logging.getLogger(__name__)

_PROFILE_SET: ProfileSet | None = None
_PROFILE_SET_LOCK = threading.Lock()

#: Placeholder for a word boundary in ``ngrams.txt``.
_BOUNDARY = "_"


@dataclasses.dataclass(frozen=True, slots=True)
class ProfileSet:
    """Every charset profile plus the byte tables scoring needs.

    :param profiles: Registry entries in tie-break preference order.
    :param byte_maps: Profile name -> 256-byte translate table folding
        letters to lowercase and everything else to a space.
    :param trigrams: Profile name -> ``(language, trigram set)`` pairs, in
        the profile's language order.
    :param common_chars: Profile name -> frequent multi-byte characters as
        big-endian integers.
    """

    profiles: tuple[EncodingInfo, ...]
    byte_maps: dict[str, bytes]
    trigrams: dict[str, tuple[tuple[str, frozenset[bytes]], ...]]
    common_chars: dict[str, frozenset[int]]

    @property
    def names(self) -> tuple[str, ...]:
        """Every encoding name a match can report."""
        return tuple(p.name for p in self.profiles)


def parse_table(text: str) -> dict[str, list[str]]:
    """Parse the ``key: value value ...`` format shared by the data files.

    Repeated keys accumulate.  Blank lines and ``#`` comments are skipped.

    :raises ValueError: If a line has no key.
    """
    table: dict[str, list[str]] = {}
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, rest = line.partition(":")
        key = key.strip()
        if not sep or not key:
            msg = f"line {lineno}: expected '<key>: <values>'"
            raise ValueError(msg)
        table.setdefault(key, []).extend(rest.split())
    return table


def _read_table(filename: str) -> dict[str, list[str]]:
    try:
        ref = importlib.resources.files("charsleuth.models").joinpath(filename)
        table = parse_table(ref.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, ValueError) as e:
        msg = f"cannot load {filename}: {e}"
        raise LoadError(msg) from e
    if not table:
        msg = f"cannot load {filename}: no entries found"
        raise LoadError(msg)
    return table


def load_ngrams() -> dict[str, tuple[str, ...]]:
    """Read the bundled trigram lists, keyed by language.

    :returns: Language code -> trigrams, with word boundaries as spaces.
    :raises LoadError: If the file is missing, malformed or holds a token
        that is not three characters long.
    """
    result: dict[str, tuple[str, ...]] = {}
    for lang, tokens in _read_table("ngrams.txt").items():
        for token in tokens:
            if len(token) != 3:
                msg = f"cannot load ngrams.txt: bad trigram {token!r} for {lang}"
                raise LoadError(msg)
        result[lang] = tuple(t.replace(_BOUNDARY, " ") for t in tokens)
    return result


def load_common_chars() -> dict[str, str]:
    """Read the bundled frequent-character lists, keyed by writing system.

    :raises LoadError: If the file is missing or malformed.
    """
    table = _read_table("commonchars.txt")
    return {key: "".join(chunks) for key, chunks in table.items()}


def build_byte_map(codec: str) -> bytes:
    """Return a translate table for single-byte n-gram scoring under *codec*.

    Bytes that decode to a letter map to the byte of its lowercase form
    (or to themselves when the lowercase form has no single-byte encoding).
    Every other byte maps to a space.
    """
    table = bytearray(b" " * 256)
    for b in range(256):
        raw = bytes((b,))
        try:
            ch = raw.decode(codec)
        except UnicodeDecodeError:
            continue
        if not ch.isalpha():
            continue
        try:
            lower = ch.lower().encode(codec)
        except UnicodeEncodeError:
            lower = raw
        table[b] = lower[0] if len(lower) == 1 else b
    return bytes(table)


def encode_trigrams(trigrams: tuple[str, ...], codec: str) -> frozenset[bytes]:
    """Encode *trigrams* with *codec*, keeping those that stay three bytes."""
    encoded: set[bytes] = set()
    for gram in trigrams:
        try:
            raw = gram.encode(codec)
        except UnicodeEncodeError:
            continue
        if len(raw) == 3:
            encoded.add(raw)
    return frozenset(encoded)


def encode_common_chars(chars: str, codec: str) -> frozenset[int]:
    """Encode *chars* with *codec* as big-endian integers of multi-byte forms."""
    values: set[int] = set()
    for ch in chars:
        try:
            raw = ch.encode(codec)
        except UnicodeEncodeError:
            continue
        if len(raw) >= 2:
            values.add(int.from_bytes(raw, "big"))
    return frozenset(values)


def _build_profile_set(profiles: tuple[EncodingInfo, ...]) -> ProfileSet:
    ngrams = load_ngrams()
    common = load_common_chars()
    byte_maps: dict[str, bytes] = {}
    trigrams: dict[str, tuple[tuple[str, frozenset[bytes]], ...]] = {}
    common_chars: dict[str, frozenset[int]] = {}

    for enc in profiles:
        try:
            codecs.lookup(enc.python_codec)
        except LookupError as e:
            msg = f"profile {enc.name}: unknown codec {enc.python_codec!r}"
            raise LoadError(msg) from e

        if not enc.is_multibyte:
            byte_maps[enc.name] = build_byte_map(enc.python_codec)
            pairs = []
            for lang in enc.languages:
                if lang not in ngrams:
                    msg = f"profile {enc.name}: no trigram data for {lang!r}"
                    raise LoadError(msg)
                pairs.append((lang, encode_trigrams(ngrams[lang], enc.python_codec)))
            trigrams[enc.name] = tuple(pairs)
        elif enc.common_chars is not None:
            if enc.common_chars not in common:
                msg = f"profile {enc.name}: no character list {enc.common_chars!r}"
                raise LoadError(msg)
            common_chars[enc.name] = encode_common_chars(
                common[enc.common_chars], enc.python_codec
            )

    return ProfileSet(
        profiles=profiles,
        byte_maps=byte_maps,
        trigrams=trigrams,
        common_chars=common_chars,
    )


def load_profile_set() -> ProfileSet:
    """Build the shared :class:`ProfileSet` once and return it.

    :raises LoadError: If any bundled data file is missing or malformed, or
        a profile refers to a codec or language that is not available.
    """
    global _PROFILE_SET  # noqa: PLW0603
    if _PROFILE_SET is not None:
        return _PROFILE_SET

    with _PROFILE_SET_LOCK:
        if _PROFILE_SET is not None:
            return _PROFILE_SET
        profile_set = _build_profile_set(REGISTRY)
        logger.debug(
            "loaded %d charset profiles (%d with trigram data)",
            len(profile_set.profiles),
            len(profile_set.trigrams),
        )
        _PROFILE_SET = profile_set
        return profile_set
