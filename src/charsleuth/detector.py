"""EncodingDetector: binary/text classification plus charset detection."""

from __future__ import annotations

import dataclasses

from charsleuth._utils import (
    DEFAULT_MAX_BYTES,
    _coerce_buffer,
    _validate_hint,
    _validate_max_bytes,
)
from charsleuth.errors import NoCandidateError
from charsleuth.models import ProfileSet, load_profile_set
from charsleuth.pipeline import Match
from charsleuth.pipeline.binary import classify
from charsleuth.pipeline.orchestrator import run_pipeline
from charsleuth.signatures import SignatureDatabase, load_signatures


@dataclasses.dataclass(slots=True)
class DetectorConfig:
    """Settings owned by one :class:`EncodingDetector`.

    :param strip_tags: Remove ``<...>`` markup before charset scoring.
    :param declared_encoding: Encoding hint used when a call passes none.
    :param max_bytes: Leading bytes examined per call, ``None`` for all.
    """

    strip_tags: bool = False
    declared_encoding: str | None = None
    max_bytes: int | None = DEFAULT_MAX_BYTES


class EncodingDetector:
    """Classify byte buffers as binary or text and detect their charset.

    Reference data is loaded when the first detector is built and shared by
    every detector in the process.  A detector keeps nothing between calls
    except its :class:`DetectorConfig`, so one instance can serve any number
    of sequential calls.  Changing its settings while another thread is
    using it is not supported; give each thread its own detector.
    """

    def __init__(
        self,
        strip_tags: bool = False,
        declared_encoding: str | None = None,
        max_bytes: int | None = DEFAULT_MAX_BYTES,
    ) -> None:
        """Initialize the detector.

        :param strip_tags: Remove ``<...>`` markup before charset scoring.
        :param declared_encoding: Default encoding hint for every call.
        :param max_bytes: Maximum number of leading bytes to examine, or
            ``None`` to examine the whole buffer.
        :raises ValueError: If *max_bytes* is not a positive integer.
        :raises InvalidInputError: If *declared_encoding* is not a string.
        :raises LoadError: If the bundled reference data cannot be loaded.
        """
        _validate_max_bytes(max_bytes)
        self._config = DetectorConfig(
            strip_tags=bool(strip_tags),
            declared_encoding=_validate_hint(declared_encoding),
            max_bytes=max_bytes,
        )
        self._signatures: SignatureDatabase = load_signatures()
        self._profiles: ProfileSet = load_profile_set()

    @property
    def config(self) -> DetectorConfig:
        """A copy of the current settings."""
        return dataclasses.replace(self._config)

    @property
    def strip_tags(self) -> bool:
        """Whether markup tags are removed before charset scoring."""
        return self._config.strip_tags

    @strip_tags.setter
    def strip_tags(self, value: bool) -> None:
        self._config.strip_tags = bool(value)

    @property
    def declared_encoding(self) -> str | None:
        """The default encoding hint, overridden by a per-call hint."""
        return self._config.declared_encoding

    @declared_encoding.setter
    def declared_encoding(self, value: str | None) -> None:
        self._config.declared_encoding = _validate_hint(value)

    @property
    def max_bytes(self) -> int | None:
        return self._config.max_bytes

    @max_bytes.setter
    def max_bytes(self, value: int | None) -> None:
        _validate_max_bytes(value)
        self._config.max_bytes = value

    def _binary_match(self, data: bytes) -> Match | None:
        label = classify(data, self._signatures)
        if label is None:
            return None
        return Match.binary()

    def _text_matches(self, data: bytes, hint: str | None) -> list[Match]:
        if hint is None:
            hint = self._config.declared_encoding
        return run_pipeline(
            data,
            hint=hint,
            strip=self._config.strip_tags,
            max_bytes=None,
            profile_set=self._profiles,
        )

    def _prepare(self, data: object, hint: object) -> tuple[bytes, str | None]:
        buf = _coerce_buffer(data)
        checked_hint = _validate_hint(hint)
        if self._config.max_bytes is not None:
            buf = buf[: self._config.max_bytes]
        return buf, checked_hint

    def detect(
        self, data: bytes | bytearray | memoryview, hint: str | None = None
    ) -> Match:
        """Return the single best match for *data*.

        Binary content yields :meth:`Match.binary`; text yields the
        highest-ranked charset candidate.

        :param data: The buffer to examine.
        :param hint: Encoding the caller believes the data is in.
        :raises InvalidInputError: If *data* is not a byte buffer or *hint*
            is not a string.
        :raises ClassificationError: If the binary check produced no verdict.
        :raises NoCandidateError: If no charset fits the data, e.g. when it
            is empty.
        """
        buf, checked_hint = self._prepare(data, hint)
        binary = self._binary_match(buf)
        if binary is not None:
            return binary
        matches = self._text_matches(buf, checked_hint)
        if not matches:
            msg = f"no charset candidate for {len(buf)} bytes of input"
            raise NoCandidateError(msg)
        return matches[0]

    def detect_all(
        self, data: bytes | bytearray | memoryview, hint: str | None = None
    ) -> list[Match]:
        """Return every plausible match for *data*, best first.

        Binary content yields a one-element list holding the binary match.
        The list is empty when no charset fits, e.g. for an empty buffer.

        :param data: The buffer to examine.
        :param hint: Encoding the caller believes the data is in.
        :raises InvalidInputError: If *data* is not a byte buffer or *hint*
            is not a string.
        :raises ClassificationError: If the binary check produced no verdict.
        """
        buf, checked_hint = self._prepare(data, hint)
        binary = self._binary_match(buf)
        if binary is not None:
            return [binary]
        return self._text_matches(buf, checked_hint)

    @staticmethod
    def supported_encodings() -> list[str]:
        """Return the name of every encoding a match can report.

        The names come from the shared profile set, which is built once per
        process, so the list is the same for every detector.
        """
        return list(load_profile_set().names)
