"""Binary-signature database and file(1)-style content description.

The rules live in the bundled ``signatures.txt`` so the table can be
versioned and reviewed separately from the matching code.  The database is
parsed once per process and shared read-only by every detector.
"""

from __future__ import annotations

import importlib.resources
import logging
import threading
from dataclasses import dataclass

from charsleuth.errors import ClassificationError, LoadError

logger = logging.getLogger(__name__)

_DATABASE: SignatureDatabase | None = None
_DATABASE_LOCK = threading.Lock()

# Character classes in the style of file(1)'s encoding sniffing:
#   F - never appears in text
#   T - plain ASCII text (printables, BEL BS HT LF VT FF CR SO SI ESC, NEL)
#   I - ISO-8859 text (0xA0-0xFF)
#   X - non-ISO extended ASCII (the rest of 0x80-0x9F)
_F, _T, _I, _X = 0, 1, 2, 3

_TEXT_CHARS: bytes = bytes(
    [_F] * 7
    + [_T] * 7  # BEL BS HT LF VT FF CR
    + [_T] * 2  # SO SI, the ISO-2022 shifts
    + [_F] * 11
    + [_T]  # ESC
    + [_F] * 4
    + [_T] * 95  # 0x20-0x7E
    + [_F]  # DEL
    + [_X] * 5
    + [_T]  # NEL
    + [_X] * 26
    + [_I] * 96
)

# bytes.translate deletion tables: what is left over after deleting every
# byte of a class tells us whether the buffer stays inside that class.
_ASCII_TEXT: bytes = bytes(b for b in range(256) if _TEXT_CHARS[b] == _T)
_ISO_TEXT: bytes = bytes(b for b in range(256) if _TEXT_CHARS[b] in (_T, _I))
_EXTENDED_TEXT: bytes = bytes(b for b in range(256) if _TEXT_CHARS[b] != _F)
_HIGH_BYTES: bytes = bytes(range(0x80, 0x100))

_UNICODE_BOMS: tuple[tuple[bytes, str, int], ...] = (
    (b"\x00\x00\xfe\xff", "Unicode text, UTF-32, big-endian text", 4),
    (b"\xff\xfe\x00\x00", "Unicode text, UTF-32, little-endian text", 4),
    (b"\xfe\xff", "Unicode text, UTF-16, big-endian text", 2),
    (b"\xff\xfe", "Unicode text, UTF-16, little-endian text", 2),
)

# Byte orders tried for Unicode text without a BOM, widest unit first.
_BOMLESS_UNICODE: tuple[tuple[str, str, int], ...] = (
    ("utf-32-le", "Little-endian UTF-32 Unicode text", 4),
    ("utf-32-be", "Big-endian UTF-32 Unicode text", 4),
    ("utf-16-le", "Little-endian UTF-16 Unicode text", 2),
    ("utf-16-be", "Big-endian UTF-16 Unicode text", 2),
)
_UNICODE_WHITESPACE = frozenset("\t\n\r")


@dataclass(frozen=True, slots=True)
class SignatureRule:
    """A byte-pattern rule mapping matching content to a category label.

    :param tests: ``(offset, magic)`` pairs; every one must match.
    :param label: file(1)-style description of the content.
    :param binary_only: The magic is made of text characters, so the rule
        only applies when the buffer does not read as text.
    """

    tests: tuple[tuple[int, bytes], ...]
    label: str
    binary_only: bool = False

    def matches(self, data: bytes) -> bool:
        """Return True if every test of this rule matches *data*."""
        for offset, magic in self.tests:
            if data[offset : offset + len(magic)] != magic:
                return False
        return True


def _decode_pattern(text: str) -> bytes:
    """Turn an escaped pattern such as ``\\x7fELF`` into raw bytes."""
    return text.encode("latin-1").decode("unicode_escape").encode("latin-1")


def parse_signatures(text: str) -> tuple[SignatureRule, ...]:
    """Parse the signature table format described in ``signatures.txt``.

    :param text: The table contents.
    :returns: The rules in file order.
    :raises ValueError: If a line is malformed.
    """
    rules: list[SignatureRule] = []
    for lineno, raw in enumerate(text.splitlines(), start=1):
        if not raw.strip() or raw.lstrip().startswith("#"):
            continue
        tests_text, sep, label = raw.partition("\t")
        label = label.strip()
        if not sep or not label:
            msg = f"line {lineno}: expected '<tests>\\t<label>'"
            raise ValueError(msg)
        binary_only = tests_text.startswith("?")
        if binary_only:
            tests_text = tests_text[1:]
        tests: list[tuple[int, bytes]] = []
        for part in tests_text.split("&"):
            offset_text, eq, pattern = part.partition("=")
            if not eq or not pattern:
                msg = f"line {lineno}: expected offset=bytes, got {part!r}"
                raise ValueError(msg)
            try:
                offset = int(offset_text, 0)
                magic = _decode_pattern(pattern)
            except (UnicodeError, ValueError) as e:
                msg = f"line {lineno}: {e}"
                raise ValueError(msg) from e
            if offset < 0 or not magic:
                msg = f"line {lineno}: offset must be >= 0 and bytes non-empty"
                raise ValueError(msg)
            tests.append((offset, magic))
        rules.append(
            SignatureRule(tests=tuple(tests), label=label, binary_only=binary_only)
        )
    return tuple(rules)


def _looks_utf8(data: bytes) -> bool:
    """Return True if *data* is valid UTF-8 whose ASCII bytes are all text."""
    if data.translate(None, _HIGH_BYTES).translate(None, _ASCII_TEXT):
        return False
    try:
        data.decode("utf-8")
    except UnicodeDecodeError:
        return False
    return True


def _bomless_unicode_label(data: bytes) -> str | None:
    """Return the label of the first byte order *data* reads as, if any.

    The decoded text must be free of control characters other than tab and
    line breaks, and mostly Latin-1, which is how file(1) tells UTF-16/32
    text from NUL-padded binary.
    """
    for codec, label, unit in _BOMLESS_UNICODE:
        usable = len(data) - len(data) % unit
        if usable < 2 * unit:
            continue
        try:
            text = data[:usable].decode(codec)
        except UnicodeDecodeError:
            continue
        latin = 0
        for ch in text:
            cp = ord(ch)
            if ch in _UNICODE_WHITESPACE:
                latin += 1
            elif cp < 0x20 or 0x7F <= cp <= 0x9F:
                break
            elif cp <= 0xFF:
                latin += 1
        else:
            if 2 * latin > len(text):
                return label
    return None


def describe_encoding(data: bytes) -> str:
    """Describe content that matched no signature, the way file(1) does.

    :param data: The raw bytes.
    :returns: ``"empty"``, one of several ``"... text"`` labels, or ``"data"``.
    """
    if not data:
        return "empty"
    for bom, label, unit in _UNICODE_BOMS:
        if data.startswith(bom) and len(data) % unit == 0:
            return label
    if not data.translate(None, _ASCII_TEXT):
        return "ASCII text"
    if _looks_utf8(data):
        return "UTF-8 Unicode text"
    if not data.translate(None, _ISO_TEXT):
        return "ISO-8859 text"
    if not data.translate(None, _EXTENDED_TEXT):
        return "Non-ISO extended-ASCII text"
    return _bomless_unicode_label(data) or "data"


class SignatureDatabase:
    """An immutable, ordered collection of :class:`SignatureRule` objects."""

    __slots__ = ("_rules",)

    def __init__(self, rules: tuple[SignatureRule, ...]) -> None:
        self._rules = tuple(rules)

    @property
    def rules(self) -> tuple[SignatureRule, ...]:
        return self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def match(self, data: bytes) -> SignatureRule | None:
        """Return the first rule matching *data*, or ``None``.

        A ``binary_only`` rule is passed over when *data* reads as text, so
        prose that happens to start with ``MZ`` or ``ID3`` is not binary.

        :raises ClassificationError: If the database holds no rules or a
            rule cannot be evaluated against *data*.
        """
        if not self._rules:
            msg = "signature database holds no rules"
            raise ClassificationError(msg)
        reads_as_text: bool | None = None
        for rule in self._rules:
            try:
                matched = rule.matches(data)
            except Exception as e:
                msg = f"signature rule {rule.label!r} failed: {e}"
                raise ClassificationError(msg) from e
            if not matched:
                continue
            if rule.binary_only:
                if reads_as_text is None:
                    reads_as_text = describe_encoding(data).endswith("text")
                if reads_as_text:
                    logger.debug("skipping %r: content reads as text", rule.label)
                    continue
            return rule
        return None

    def describe(self, data: bytes) -> str:
        """Return a file(1)-style description of *data*.

        A matching signature wins; otherwise the content is described by
        its byte composition (:func:`describe_encoding`).
        """
        rule = self.match(data)
        if rule is not None:
            return rule.label
        return describe_encoding(data)


def load_signatures() -> SignatureDatabase:
    """Load the bundled signature table once and return the shared database.

    :raises LoadError: If the table is missing, unreadable, malformed or empty.
    """
    global _DATABASE  # noqa: PLW0603
    if _DATABASE is not None:
        return _DATABASE

    with _DATABASE_LOCK:
        if _DATABASE is not None:
            return _DATABASE
        try:
            ref = importlib.resources.files("charsleuth.signatures").joinpath(
                "signatures.txt"
            )
            rules = parse_signatures(ref.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, ValueError) as e:
            msg = f"cannot load signature database: {e}"
            raise LoadError(msg) from e
        if not rules:
            msg = "cannot load signature database: no rules found"
            raise LoadError(msg)
        logger.debug("loaded %d binary signature rules", len(rules))
        _DATABASE = SignatureDatabase(rules)
        return _DATABASE
