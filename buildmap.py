#!/usr/bin/env python3
"""Build the WaniKani translation table from an EDICT2 dictionary.

Steps:
1. Dictionary parsing: EDICT2 file → headword → condensed meanings
2. Vocabulary: WaniKani subjects (online, refreshing vocab.json) or vocab.json (offline)
3. Resolving: translations.json (subject id → synonyms) and misses.json (words without entry)

The online mode needs WANIKANI_API_TOKEN in the environment or .env.

Usage:
    python buildmap.py --config wksync.config.json --verbose
    python buildmap.py --offline --dictionary data/wadokudict2
    python buildmap.py --config wksync.config.json --write-config
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from wksync.common.config import CONFIG_FILENAME, get_api_token, load_config, resolve_path, write_config
from wksync.common.errors import ConfigError, WaniKaniError
from wksync.common.logging import log_error
from wksync.common.progress import ConsoleProgress
from wksync.input import read_dictionary_file
from wksync.output import build_translations, write_misses, write_translations
from wksync.wanikani import WaniKaniClient, get_vocab_map


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for building the translation table."""
    parser = argparse.ArgumentParser(
        description="Build translations.json from an EDICT2 dictionary and the WaniKani vocabulary"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=CONFIG_FILENAME,
        help=f"Path to config file (default: {CONFIG_FILENAME})",
    )
    parser.add_argument(
        "--dictionary",
        type=str,
        help="EDICT2 dictionary file (overrides dictionary_file from config)",
    )
    parser.add_argument(
        "--write-config",
        action="store_true",
        help="Write the effective config (defaults plus overrides) to --config and exit",
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Use the offline vocabulary copy even if an API token is available",
    )
    parser.add_argument(
        "--unburned",
        action="store_true",
        help="Only translate vocabulary that isn't burned yet (online only)",
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
    except ConfigError as e:
        log_error(str(e))
        return 2

    if args.write_config:
        write_config(config_path, config)
        print(f"[config] [ok] Wrote {config_path}")
        return 0

    dictionary_path = Path(args.dictionary) if args.dictionary else resolve_path(config_path, config.dictionary_file)
    if not dictionary_path.exists():
        log_error(f"Dictionary file does not exist: {dictionary_path}")
        return 2

    token = None if args.offline else get_api_token()
    vocab_path = resolve_path(config_path, config.vocab_file)
    if token is None and not vocab_path.exists():
        log_error(f"No API token and no offline vocabulary at {vocab_path}")
        return 2

    if args.verbose:
        print(f"\n{'=' * 60}")
        print("🚀 Building translations")
        print(f"{'=' * 60}")

    dictionary = read_dictionary_file(dictionary_path, config=config, verbose=args.verbose, debug=args.debug)

    client = None
    if token is not None:
        client = WaniKaniClient(
            token,
            config=config,
            progress=ConsoleProgress() if args.verbose else None,
            verbose=args.verbose,
            debug=args.debug,
        )
    try:
        vocab = get_vocab_map(client, vocab_path, unburned=args.unburned, verbose=args.verbose)
    except WaniKaniError as e:
        log_error(str(e))
        return 1
    except ConfigError as e:
        log_error(str(e))
        return 2

    translations, untranslated = build_translations(dictionary, vocab, config.headword_marker)

    translations_path = write_translations(resolve_path(config_path, config.translations_file), translations)
    misses_path = write_misses(resolve_path(config_path, config.misses_file), untranslated)

    if args.verbose:
        print(f"\n{'=' * 60}")
        print("✅ Complete!")
        print(f"   Translated: {len(translations)} → {translations_path}")
        print(f"   Untranslated: {len(untranslated)} → {misses_path}")
        print(f"{'=' * 60}\n")

    return 0


if __name__ == "__main__":
    sys.exit(main())
