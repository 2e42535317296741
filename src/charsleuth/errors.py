"""Exception hierarchy for charsleuth.

Every error raised on purpose by the engine derives from
:class:`CharsleuthError`, so callers can catch the whole family in one place
or single out the kind they care about.
"""

from __future__ import annotations


class CharsleuthError(Exception):
    """Base class for all charsleuth errors."""


class InvalidInputError(CharsleuthError, TypeError):
    """The argument is not something detection can run on.

    Raised before any detection logic runs, e.g. when a ``str`` is passed
    where a byte buffer is expected, or when a hint is not a string.
    """


class ClassificationError(CharsleuthError):
    """The signature engine could not produce any verdict for the buffer.

    This is distinct from "looks like text": the buffer must not be routed
    into a text pipeline when the binary check itself failed.
    """


class NoCandidateError(CharsleuthError):
    """No charset profile admits a viable interpretation of the buffer."""


class LoadError(CharsleuthError):
    """Bundled reference data (signatures or charset models) failed to load."""
