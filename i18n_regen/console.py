"""Console output helpers shared by the pipeline and the CLI."""

import sys

_VERBOSE = False


def set_verbose(enabled: bool) -> None:
    """Enable or disable debug output on stderr."""
    global _VERBOSE
    _VERBOSE = enabled


def safe_print(text: str) -> None:
    """Print text safely, handling Unicode encoding errors on Windows."""
    try:
        print(text, flush=True)
    except UnicodeEncodeError:
        # Replace problematic characters with ASCII equivalents
        safe_text = text.encode('ascii', 'replace').decode('ascii')
        print(safe_text, flush=True)


def log_warning(message: str) -> None:
    """Log a warning to stderr."""
    print(f"[i18n-regen] Warning: {message}", file=sys.stderr, flush=True)


def log_debug(message: str) -> None:
    """Log debug message to stderr (only with --verbose)."""
    if _VERBOSE:
        print(f"[i18n-regen] {message}", file=sys.stderr, flush=True)


def shorten(text: str, limit: int = 40) -> str:
    """Shorten a phrase for single-line display."""
    display = text[:limit] + '...' if len(text) > limit else text
    return display.replace('\n', '\\n')
