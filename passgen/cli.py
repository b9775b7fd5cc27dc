#!/usr/bin/env python3
import sys
import logging
import argparse
from random import Random
from typing import List, Optional, TextIO

from passgen.config import (
    DEFAULT_COUNT,
    DEFAULT_ENV_FILE,
    DEFAULT_LOG_LEVEL,
    DEFAULT_WORDLIST,
    DEFAULT_WORDS,
    LOG_LEVELS,
    Settings,
    load_config,
    resolve_pepper,
    setup_logging,
)
from passgen.errors import PassgenError
from passgen.history import PassphraseHistory
from passgen.passphrase import generate_passphrases, load_wordlist, verify_tag

logger = logging.getLogger(__name__)


class PassgenArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports bad arguments with exit status 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def at_least_one(value: str) -> int:
    """Parse an integer flag; values below 1 are raised to 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}")
    return max(1, number)


def build_parser() -> argparse.ArgumentParser:
    parser = PassgenArgumentParser(
        prog="passgen",
        allow_abbrev=False,
        description="Generate memorable Word-Word-NNNN passphrases from a word list",
    )
    parser.add_argument("wordlist", nargs="?", default=DEFAULT_WORDLIST,
                        help=f"Path to the word list, one word per line (default: {DEFAULT_WORDLIST})")
    parser.add_argument("--count", type=at_least_one, default=DEFAULT_COUNT,
                        help=f"Number of passphrases to generate (default: {DEFAULT_COUNT})")
    parser.add_argument("--words", type=at_least_one, default=DEFAULT_WORDS,
                        help=f"Words per passphrase (default: {DEFAULT_WORDS})")
    parser.add_argument("--log", default="", metavar="FILE",
                        help="Append generated passphrases to FILE (default: no logging)")
    parser.add_argument("--capitalize", dest="capitalize", action="store_true", default=True,
                        help="Uppercase the first letter of each word (default)")
    parser.add_argument("--no-capitalize", dest="capitalize", action="store_false",
                        help="Use words exactly as they appear in the word list")
    parser.add_argument("--wordspath", metavar="FILE",
                        help="Word list path, takes precedence over the positional argument")
    parser.add_argument("--pepper", action="store_true",
                        help="Append a 4-character tag keyed with PASSGEN_PEPPER")
    parser.add_argument("--env", default=DEFAULT_ENV_FILE, metavar="FILE",
                        help=f"Env file that may define PASSGEN_PEPPER (default: {DEFAULT_ENV_FILE})")
    parser.add_argument("--verify", metavar="PASSPHRASE",
                        help="Check the pepper tag of a previously generated passphrase")
    parser.add_argument("--config", metavar="FILE",
                        help="YAML file with default option values")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default=DEFAULT_LOG_LEVEL,
                        help=f"Diagnostic logging level (default: {DEFAULT_LOG_LEVEL})")
    return parser


def parse_settings(argv: Optional[List[str]] = None) -> Settings:
    """Parse the command line (seeded from --config) into Settings, loading the pepper if needed."""
    parser = build_parser()

    # --config has to be known before the real parse so its values become defaults
    pre_parser = PassgenArgumentParser(add_help=False, allow_abbrev=False)
    pre_parser.add_argument("--config")
    known, _ = pre_parser.parse_known_args(argv)
    if known.config:
        parser.set_defaults(**load_config(known.config))

    args = parser.parse_args(argv)

    pepper = None
    if args.pepper or args.verify is not None:
        pepper = resolve_pepper(args.env)

    return Settings(
        wordlist_path=args.wordspath or args.wordlist,
        count=args.count,
        words_per_password=args.words,
        capitalize=args.capitalize,
        log_path=args.log or None,
        env_path=args.env,
        use_pepper=args.pepper,
        pepper=pepper,
        verify=args.verify,
        log_level=args.log_level,
    )


def verify(settings: Settings, out: TextIO) -> int:
    if verify_tag(settings.verify, settings.pepper):
        print("valid", file=out)
        return 0
    print("invalid", file=out)
    return 1


def run(settings: Settings, rng: Optional[Random] = None, out: Optional[TextIO] = None) -> int:
    """Generate, print and optionally log passphrases according to settings."""
    out = out or sys.stdout
    if settings.verify is not None:
        return verify(settings, out)

    words = load_wordlist(settings.wordlist_path)
    passphrases = generate_passphrases(
        words,
        settings.words_per_password,
        settings.count,
        capitalize=settings.capitalize,
        pepper=settings.pepper if settings.use_pepper else None,
        rng=rng,
    )

    history = PassphraseHistory(settings.log_path) if settings.log_path else None
    try:
        for passphrase in passphrases:
            print(passphrase, file=out)
            if history:
                history.record(passphrase)
    finally:
        if history:
            history.close()

    logger.info(f"Generated {settings.count} passphrase(s)")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Handle command-line arguments and generate passphrases."""
    try:
        settings = parse_settings(argv)
        setup_logging(settings.log_level)
        logger.debug(f"Settings: {settings}")
        return run(settings)
    except PassgenError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
