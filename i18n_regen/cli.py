"""
I18n Locale Regeneration

Recreates a locale file by translating the source locale into the target
language with the Google Cloud Translation API. The output keeps the source
file's structure and key order; only string values are translated, and
numbers, booleans, arrays and nulls are copied as-is.

Entries that already exist in the target file are kept, so re-running after
the source gains new keys only translates the new keys.

Setup:
    export GOOGLE_TRANSLATE_API_KEY=...   (or put it in .env)

Usage:
    i18n-regen --source-lang=en --target-lang=de
    i18n-regen -s en -t pl --dry-run
    i18n-regen -s en -t pl --retry-failed
    i18n-regen -s en -t pl --force       # Re-translate everything
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .client import GoogleTranslateClient
from .config import find_assets_dir, load_settings
from .console import safe_print, set_verbose, shorten
from .driver import DEFAULT_BATCH_SIZE, DEFAULT_MAX_WORKERS, FAILURE_VALUE, chunked, validate_limits
from .errors import ConfigurationError, DocumentError, LookupInvariantViolation, RemoteBatchError
from .pipeline import RunStats, plan, regenerate
from .storage import load_document, locale_path, save_document


def parse_args(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog='i18n-regen',
        description='Regenerate a locale file by translating the source locale',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  i18n-regen --source-lang=en --target-lang=de
  i18n-regen -s en -t de --assets-dir=web/assets/i18n
  i18n-regen -s en -t de --dry-run         # Show what would be translated
  i18n-regen -s en -t de --retry-failed    # Re-translate entries marked "Error"
  i18n-regen -s en -t de --force           # Ignore the existing target file
        """
    )
    parser.add_argument('--source-lang', '-s', required=True, help='Source language code (e.g. en)')
    parser.add_argument('--target-lang', '-t', required=True, help='Target language code (e.g. de)')
    parser.add_argument(
        '--assets-dir', '-a',
        default=None,
        help='Directory holding <lang>.json files (default: src/assets/i18n or assets/i18n)'
    )
    parser.add_argument('--env-file', default=None, help='Environment file with GOOGLE_TRANSLATE_API_KEY (default: .env)')
    parser.add_argument(
        '--batch-size', '-b',
        type=int,
        default=DEFAULT_BATCH_SIZE,
        help=f'Phrases per API request, at most 128 (default: {DEFAULT_BATCH_SIZE})'
    )
    parser.add_argument(
        '--concurrency', '-c',
        type=int,
        default=DEFAULT_MAX_WORKERS,
        help=f'Requests in flight at once (default: {DEFAULT_MAX_WORKERS})'
    )
    parser.add_argument('--force', action='store_true', help='Re-translate everything, ignoring the existing target file')
    parser.add_argument(
        '--retry-failed',
        action='store_true',
        help=f'Re-translate entries holding the failure marker "{FAILURE_VALUE}"'
    )
    parser.add_argument('--fail-fast', action='store_true', help='Abort without writing if any batch fails')
    parser.add_argument('--dry-run', action='store_true', help='Show what would be translated without calling the API')
    parser.add_argument('--verbose', '-v', action='store_true', help='Verbose output')
    return parser.parse_args(argv)


def print_plan(phrases, batch_size: int) -> None:
    pending = phrases.unresolved()
    batches = len(list(chunked(pending, batch_size)))
    print(f"\n[DRY RUN] {len(pending)} phrases in {batches} batch(es) would be translated:")
    for i, phrase in enumerate(pending[:10]):
        safe_print(f"  {i + 1}. \"{shorten(phrase, 50)}\"")
    if len(pending) > 10:
        print(f"  ... and {len(pending) - 10} more")


def print_summary(stats: RunStats, target_path: Path) -> None:
    print("\n" + "=" * 60)
    print("Translation Summary")
    print("=" * 60)
    print(f"Distinct phrases: {stats.phrases}")
    print(f"Already translated: {stats.reused}")
    print(f"Translated now: {stats.translated}")
    print(f"Failed: {len(stats.failed)}")
    print(f"Batches sent: {stats.batches}")
    print(f"Entries inserted: {stats.inserted}")
    if stats.replaced:
        print(f"Failed entries replaced: {stats.replaced}")
    if stats.overwrites:
        print(f"Structural overwrites: {stats.overwrites}")
    print(f"Time elapsed: {stats.elapsed:.1f}s")
    print(f"\nOutput saved to: {target_path}")

    if stats.failed:
        print(f"\nFailed translations ({len(stats.failed)}), written as \"{FAILURE_VALUE}\":")
        for phrase in stats.failed[:10]:
            safe_print(f"  - \"{shorten(phrase, 60)}\"")
        if len(stats.failed) > 10:
            print(f"  ... and {len(stats.failed) - 10} more")
        print("\nRe-run with --retry-failed to translate them again.")


def run(args) -> int:
    set_verbose(args.verbose)
    validate_limits(args.batch_size, args.concurrency)

    print("\n" + "=" * 60)
    print("I18n Locale Regeneration")
    print("=" * 60)

    assets_dir = Path(args.assets_dir) if args.assets_dir else find_assets_dir()
    source_path = locale_path(assets_dir, args.source_lang)
    target_path = locale_path(assets_dir, args.target_lang)

    source = load_document(source_path)
    if source is None:
        raise ConfigurationError(f"Source file {source_path} does not exist!")

    target = None if args.force else load_document(target_path, require_object=False)

    print(f"\nSource: {source_path}")
    print(f"Target: {target_path}{' (new file)' if target is None else ''}")
    print(f"Languages: {args.source_lang} -> {args.target_lang}")
    print(f"Force mode: {args.force}")

    if args.dry_run:
        phrases = plan(source, target, retry_failed=args.retry_failed)
        print(f"Distinct phrases: {len(phrases)}")
        print(f"Already translated: {phrases.resolved_count()}")
        print_plan(phrases, args.batch_size)
        return 0

    settings = load_settings(args.env_file)
    client = GoogleTranslateClient(settings.api_key, api_url=settings.api_url)

    print("\n" + "-" * 40)
    print(f"Translating (batch size: {args.batch_size}, concurrency: {args.concurrency})...")
    print("-" * 40)

    document, stats = regenerate(
        source,
        target,
        args.target_lang,
        client,
        source_lang=args.source_lang,
        batch_size=args.batch_size,
        max_workers=args.concurrency,
        fail_fast=args.fail_fast,
        retry_failed=args.retry_failed,
    )

    save_document(target_path, document)
    print_summary(stats, target_path)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        return run(args)
    except (ConfigurationError, DocumentError) as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 1
    except RemoteBatchError as e:
        print(f"\nTranslation failed, nothing written: {e}", file=sys.stderr)
        return 1
    except LookupInvariantViolation as e:
        print(f"\nInternal error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
