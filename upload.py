#!/usr/bin/env python3
"""Upload translations to WaniKani as meaning synonyms.

Creates study materials for subjects that have none and appends missing
synonyms to existing ones. Synonyms entered by the user are never removed.
Requests are paced to stay below WaniKani's 60 requests per minute, so a
full upload takes a while; rerunning after an interruption is safe.

The API token needs the study_materials:create and study_materials:update
permissions. It is read from --token, WANIKANI_API_TOKEN or .env.

Usage:
    python upload.py --verbose
    python upload.py --translations data/translations.json --dry-run
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from wksync.common.config import CONFIG_FILENAME, get_api_token, load_config, resolve_path
from wksync.common.errors import ConfigError, WaniKaniError
from wksync.common.logging import log_error
from wksync.common.progress import ConsoleProgress
from wksync.output import read_translations, write_study_materials
from wksync.wanikani import WaniKaniClient


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for uploading translations."""
    parser = argparse.ArgumentParser(
        description="Sync translations.json into WaniKani study materials"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=CONFIG_FILENAME,
        help=f"Path to config file (default: {CONFIG_FILENAME})",
    )
    parser.add_argument(
        "--translations",
        type=str,
        help="Translation table (overrides translations_file from config)",
    )
    parser.add_argument(
        "--token",
        type=str,
        help="WaniKani API token (default: WANIKANI_API_TOKEN)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only compute and report the changes, don't write anything",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args(argv)

    config_path = Path(args.config)
    try:
        config = load_config(config_path)
        translations_path = (
            Path(args.translations) if args.translations else resolve_path(config_path, config.translations_file)
        )
        if not translations_path.exists():
            log_error(f"Translations file does not exist: {translations_path}")
            return 2
        translations = read_translations(translations_path)
    except ConfigError as e:
        log_error(str(e))
        return 2

    token = get_api_token(args.token)
    if token is None:
        log_error("No API token: pass --token or set WANIKANI_API_TOKEN")
        return 2

    client = WaniKaniClient(
        token,
        config=config,
        progress=ConsoleProgress(),
        verbose=args.verbose,
        debug=args.debug,
    )

    if args.verbose:
        print(f"\n{'=' * 60}")
        print(f"🚀 Uploading {len(translations)} translations{' (dry run)' if args.dry_run else ''}")
        print(f"{'=' * 60}")

    try:
        result = write_study_materials(client, translations, dry_run=args.dry_run, verbose=args.verbose)
    except WaniKaniError as e:
        log_error(str(e))
        return 1

    verb = "Would create" if result.dry_run else "Created"
    print(f"[sync] [ok] {verb} {result.created}, {'would update' if result.dry_run else 'updated'} "
          f"{result.updated}, unchanged {result.unchanged}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
