"""Loading and saving locale JSON files."""

import json
from pathlib import Path
from typing import Any, List, Union

from .document import OrderedMap
from .errors import DocumentError

PathLike = Union[str, Path]

INDENT = '  '


def locale_path(assets_dir: PathLike, lang_code: str) -> Path:
    """Get the path to the locale file for a language."""
    return Path(assets_dir) / f"{lang_code}.json"


def load_document(path: PathLike, require_object: bool = True):
    """
    Load a locale file, keeping key order.

    Returns None if the file does not exist. Raises DocumentError if it
    cannot be parsed, or if its top level is not an object and
    ``require_object`` is set.
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            document = json.load(f, object_pairs_hook=OrderedMap.from_pairs)
    except FileNotFoundError:
        return None
    except json.JSONDecodeError as e:
        raise DocumentError(f"Error parsing {path}: {e}") from e
    except RecursionError as e:
        raise DocumentError(f"Error parsing {path}: nesting is too deep") from e
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentError(f"Could not read {path}: {e}") from e

    if require_object and not isinstance(document, OrderedMap):
        raise DocumentError(
            f"Top level of {path} must be an object, found {type(document).__name__}"
        )
    return document


def _open_value(value: Any, depth: int, parts: List[str], stack: List[list]) -> None:
    """Emit a scalar, an empty container, or the opening of a container."""
    if isinstance(value, (OrderedMap, dict)):
        entries, brackets = iter(value.items()), '{}'
    elif isinstance(value, (list, tuple)):
        entries, brackets = ((None, item) for item in value), '[]'
    else:
        parts.append(json.dumps(value, ensure_ascii=False))
        return
    if not len(value):
        parts.append(brackets)
        return
    parts.append(brackets[0])
    stack.append([entries, brackets[1], depth + 1, True])


def dumps_document(document: OrderedMap) -> str:
    """
    Serialize like ``json.dumps(..., indent=2, ensure_ascii=False)``.

    Containers are written from an explicit stack, so nesting depth is not
    limited by the interpreter's recursion limit.
    """
    parts: List[str] = []
    stack: List[list] = []
    _open_value(document, 0, parts, stack)
    while stack:
        frame = stack[-1]
        entries, closing, depth, first = frame
        entry = next(entries, None)
        if entry is None:
            stack.pop()
            parts.append('\n' + INDENT * (depth - 1) + closing)
            continue
        key, value = entry
        parts.append(('\n' if first else ',\n') + INDENT * depth)
        frame[3] = False
        if key is not None:
            parts.append(json.dumps(key, ensure_ascii=False) + ': ')
        _open_value(value, depth, parts, stack)
    return ''.join(parts)


def save_document(path: PathLike, document: OrderedMap) -> None:
    """
    Save a locale file with 2-space indent and unescaped Unicode.

    The text is built before the file is opened, so a document that cannot be
    serialized leaves an existing file untouched.
    """
    path = Path(path)
    text = dumps_document(document)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(text)
