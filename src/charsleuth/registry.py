"""Registry of detectable encodings.

Each :class:`EncodingInfo` describes one charset profile: the name reported
to callers, how it is recognised, the Python codec backing its byte tables
and the languages it is paired with.

The order of :data:`REGISTRY` is the fixed tie-break preference used when
two candidates end up with the same confidence.  Within a family the
stricter encoding comes first, so an ISO-8859 table precedes the Windows
code page that extends it.
"""

from __future__ import annotations

import dataclasses

from charsleuth.enums import ProfileKind

_LATIN1_LANGUAGES = ("en", "da", "de", "es", "fr", "it", "nl", "no", "pt", "sv")
_LATIN2_LANGUAGES = ("cs", "hu", "pl", "ro")


@dataclasses.dataclass(frozen=True, slots=True)
class EncodingInfo:
    """Reference data for one detectable encoding.

    :param name: Canonical name reported in matches.
    :param kind: How the encoding is recognised.
    :param python_codec: Codec used to derive byte tables and validate bytes.
    :param languages: ISO 639-1 codes the profile is scored against.
    :param scorer: Key of the scoring strategy in the orchestrator.
    :param common_chars: Key of the frequent-character list used by
        multi-byte scoring, if any.
    :param c1_controls: True for ISO-8859 tables whose 0x80-0x9F range holds
        control codes; such a table is ruled out when those bytes occur.
    """

    name: str
    kind: ProfileKind
    python_codec: str
    languages: tuple[str, ...] = ()
    scorer: str = "ngram"
    common_chars: str | None = None
    c1_controls: bool = False

    @property
    def is_multibyte(self) -> bool:
        return self.kind is not ProfileKind.SINGLE_BYTE

    @property
    def is_ascii_compatible(self) -> bool:
        """Whether 7-bit text means the same thing under this encoding."""
        return self.scorer not in ("utf-16", "utf-32", "iso-2022")


def _mb(
    name: str, codec: str, languages: tuple[str, ...], scorer: str, common: str | None
) -> EncodingInfo:
    return EncodingInfo(
        name=name,
        kind=ProfileKind.MULTI_BYTE,
        python_codec=codec,
        languages=languages,
        scorer=scorer,
        common_chars=common,
    )


def _sb(
    name: str, codec: str, languages: tuple[str, ...], *, c1_controls: bool = False
) -> EncodingInfo:
    return EncodingInfo(
        name=name,
        kind=ProfileKind.SINGLE_BYTE,
        python_codec=codec,
        languages=languages,
        c1_controls=c1_controls,
    )


REGISTRY: tuple[EncodingInfo, ...] = (
    # Unicode
    _mb("UTF-8", "utf-8", (), "utf-8", None),
    EncodingInfo("UTF-16BE", ProfileKind.UNICODE_BOM, "utf-16-be", scorer="utf-16"),
    EncodingInfo("UTF-16LE", ProfileKind.UNICODE_BOM, "utf-16-le", scorer="utf-16"),
    EncodingInfo("UTF-32BE", ProfileKind.UNICODE_BOM, "utf-32-be", scorer="utf-32"),
    EncodingInfo("UTF-32LE", ProfileKind.UNICODE_BOM, "utf-32-le", scorer="utf-32"),
    # Escape-sequence encodings
    _mb("ISO-2022-JP", "iso2022_jp", ("ja",), "iso-2022", None),
    _mb("ISO-2022-KR", "iso2022_kr", ("ko",), "iso-2022", None),
    # CJK multi-byte
    _mb("Shift_JIS", "shift_jis", ("ja",), "shift_jis", "ja"),
    _mb("GB18030", "gb18030", ("zh",), "gb18030", "zh-hans"),
    _mb("EUC-JP", "euc_jp", ("ja",), "euc-jp", "ja"),
    _mb("EUC-KR", "euc_kr", ("ko",), "euc-kr", "ko"),
    _mb("Big5", "big5", ("zh",), "big5", "zh-hant"),
    # Single-byte, subsets ahead of their supersets
    _sb("ISO-8859-1", "latin-1", _LATIN1_LANGUAGES, c1_controls=True),
    _sb("windows-1252", "cp1252", _LATIN1_LANGUAGES),
    _sb("ISO-8859-2", "iso8859_2", _LATIN2_LANGUAGES, c1_controls=True),
    _sb("windows-1250", "cp1250", _LATIN2_LANGUAGES),
    _sb("ISO-8859-5", "iso8859_5", ("ru",), c1_controls=True),
    _sb("windows-1251", "cp1251", ("ru",)),
    _sb("KOI8-R", "koi8_r", ("ru",)),
    _sb("ISO-8859-6", "iso8859_6", ("ar",), c1_controls=True),
    _sb("windows-1256", "cp1256", ("ar",)),
    _sb("ISO-8859-7", "iso8859_7", ("el",), c1_controls=True),
    _sb("windows-1253", "cp1253", ("el",)),
    _sb("ISO-8859-8", "iso8859_8", ("he",), c1_controls=True),
    _sb("windows-1255", "cp1255", ("he",)),
    _sb("ISO-8859-9", "iso8859_9", ("tr",), c1_controls=True),
    _sb("windows-1254", "cp1254", ("tr",)),
)
