"""Incremental, structure-preserving translation of JSON locale files."""

from .client import GoogleTranslateClient
from .collector import PhraseMap, collect
from .document import OrderedMap
from .driver import resolve
from .errors import (
    ConfigurationError,
    DecodeError,
    DocumentError,
    LookupInvariantViolation,
    RegenError,
    RemoteBatchError,
    RequestError,
    StructuralMismatchError,
)
from .pipeline import RunStats, regenerate
from .rebuilder import rebuild
from .storage import load_document, save_document
from .walker import MISSING, walk, walk_pair

__version__ = '0.1.0'

__all__ = [
    'GoogleTranslateClient',
    'PhraseMap',
    'collect',
    'OrderedMap',
    'resolve',
    'ConfigurationError',
    'DecodeError',
    'DocumentError',
    'LookupInvariantViolation',
    'RegenError',
    'RemoteBatchError',
    'RequestError',
    'StructuralMismatchError',
    'RunStats',
    'regenerate',
    'rebuild',
    'load_document',
    'save_document',
    'MISSING',
    'walk',
    'walk_pair',
]
