"""Stage 0: Binary content detection.

Runs the signature database over the raw buffer and decides from the
resulting description whether the content is binary.  The tag-stripped
view is never used here.
"""

from __future__ import annotations

import logging
from typing import Protocol

from charsleuth.errors import ClassificationError
from charsleuth.signatures import load_signatures

logger = logging.getLogger(__name__)

# Any of these in a description marks the content as binary.
_BINARY_MARKERS: tuple[str, ...] = ("library", "bundle", "archive", "data")


class Describer(Protocol):
    """Anything that can describe a buffer, e.g. a signature database."""

    def describe(self, data: bytes) -> str | None: ...


def is_binary_label(label: str) -> bool:
    """Return True if a content description denotes binary content.

    An ``executable`` only counts when the description does not also say
    ``text``, so scripts ("shell script text executable") stay text.
    """
    if any(marker in label for marker in _BINARY_MARKERS):
        return True
    return "executable" in label and "text" not in label


def classify(data: bytes, database: Describer | None = None) -> str | None:
    """Return the binary category of *data*, or ``None`` if it looks like text.

    :param data: The raw byte data to examine.
    :param database: The signature database to consult.  Defaults to the
        shared bundled database.
    :returns: The matched description when the content is binary.
    :raises ClassificationError: If no description could be produced.
    """
    if database is None:
        database = load_signatures()
    label = database.describe(data)
    if not label:
        msg = "signature engine produced no verdict"
        raise ClassificationError(msg)
    if is_binary_label(label):
        logger.debug("binary content: %s", label)
        return label
    return None


def is_binary(data: bytes, database: Describer | None = None) -> bool:
    """Return True if data appears to be binary (not text) content."""
    return classify(data, database) is not None
