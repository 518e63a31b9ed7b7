"""Error types raised while regenerating a locale file."""

from typing import List, Optional, Sequence


class RegenError(Exception):
    """Base class for all i18n-regen errors."""


class ConfigurationError(RegenError):
    """Missing credential, source document or assets directory. Fatal."""


class DocumentError(RegenError):
    """A locale file could not be parsed or has an unusable shape. Fatal."""


class RemoteBatchError(RegenError):
    """One batch of phrases could not be translated."""

    def __init__(self, message: str, phrases: Optional[Sequence[str]] = None):
        super().__init__(message)
        self.phrases: List[str] = list(phrases or [])


class RequestError(RemoteBatchError):
    """Transport, auth or HTTP status failure."""


class DecodeError(RemoteBatchError):
    """The translation API answered with a body we cannot use."""


class StructuralMismatchError(RegenError):
    """The target holds a non-container where the source has a container.

    Never raised out of the rebuilder: the mismatched value is replaced and
    the condition is reported as a warning.
    """

    def __init__(self, path: Sequence[str], found: object):
        self.path = tuple(path)
        self.found = found
        location = '.'.join(self.path) or '<root>'
        super().__init__(
            f"Expected an object at '{location}', found {type(found).__name__}; replacing it"
        )


class LookupInvariantViolation(RegenError):
    """A source phrase has no resolved translation at rebuild time."""

    def __init__(self, phrase: str, path: Sequence[str]):
        self.phrase = phrase
        self.path = tuple(path)
        super().__init__(
            f"Translation for phrase {phrase!r} at '{'.'.join(self.path)}' not found"
        )
