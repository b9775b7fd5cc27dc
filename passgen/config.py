"""
Runtime configuration for passgen.

Three sources feed the Settings a run works from:
- command-line flags (see passgen.cli)
- an optional YAML defaults file (--config), overridden by flags
- a .env file holding the PASSGEN_PEPPER secret (--env, default ".env")

The .env file is read with python-dotenv and never overrides variables that
are already set in the process environment. The pepper is read exactly once
and carried in Settings from then on.

Example config.yaml:
    defaults:
      wordlist: words.txt
      count: 5
      words: 2
      capitalize: true
      log: passphrases.log
      env: .env
      pepper: false
    logging:
      level: WARNING
"""

import os
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from passgen.errors import ConfigurationError

PEPPER_ENV_VAR = "PASSGEN_PEPPER"
DEFAULT_ENV_FILE = ".env"
DEFAULT_WORDLIST = "words.txt"
DEFAULT_COUNT = 5
DEFAULT_WORDS = 2
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# config file key -> (argparse dest, expected type)
CONFIG_DEFAULT_KEYS = {
    "wordlist": ("wordlist", str),
    "count": ("count", int),
    "words": ("words", int),
    "capitalize": ("capitalize", bool),
    "log": ("log", str),
    "env": ("env", str),
    "pepper": ("pepper", bool),
}

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    wordlist_path: str = DEFAULT_WORDLIST
    count: int = DEFAULT_COUNT
    words_per_password: int = DEFAULT_WORDS
    capitalize: bool = True
    log_path: Optional[str] = None
    env_path: str = DEFAULT_ENV_FILE
    use_pepper: bool = False
    pepper: Optional[bytes] = field(default=None, repr=False)
    verify: Optional[str] = None
    log_level: str = DEFAULT_LOG_LEVEL


def setup_logging(log_level: str) -> None:
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def load_env_file(env_path: str) -> bool:
    """Load KEY=VALUE pairs from env_path without overriding existing variables."""
    if not os.path.isfile(env_path):
        logger.info(f"No env file at {env_path}")
        return False
    try:
        loaded = load_dotenv(env_path, override=False, interpolate=False)
    except OSError as e:
        raise ConfigurationError(f"Could not read env file '{env_path}': {e.strerror}") from e
    except UnicodeDecodeError as e:
        raise ConfigurationError(f"Env file '{env_path}' is not valid UTF-8") from e
    logger.info(f"Loaded env file {env_path}")
    return loaded


def read_pepper() -> Optional[bytes]:
    value = os.getenv(PEPPER_ENV_VAR)
    if not value:
        return None
    return value.encode("utf-8")


def resolve_pepper(env_path: str) -> bytes:
    """Load the env file and return the pepper, or fail if it is not configured."""
    load_env_file(env_path)
    pepper = read_pepper()
    if pepper is None:
        raise ConfigurationError(
            f"A pepper is required but {PEPPER_ENV_VAR} is not defined (env file: {env_path}).\n"
            f"Set {PEPPER_ENV_VAR} in your environment or create a .env file."
        )
    logger.info("Pepper secret loaded")
    return pepper


def load_config(config_file: str) -> Dict[str, Any]:
    """
    Read a YAML defaults file and return argparse defaults keyed by dest.

    Raises ConfigurationError for unreadable files, invalid YAML, unknown keys
    and values of the wrong type.
    """
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"Could not read config file '{config_file}': {e.strerror}") from e
    except UnicodeDecodeError as e:
        raise ConfigurationError(f"Config file '{config_file}' is not valid UTF-8") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file '{config_file}': {e}") from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigurationError(f"Config file '{config_file}' must contain a mapping")

    unknown = set(config) - {"defaults", "logging"}
    if unknown:
        raise ConfigurationError(
            f"Unknown section(s) in '{config_file}': {', '.join(sorted(unknown))}"
        )

    defaults = config.get("defaults") or {}
    logging_section = config.get("logging") or {}
    if not isinstance(defaults, dict) or not isinstance(logging_section, dict):
        raise ConfigurationError(f"Sections in config file '{config_file}' must be mappings")

    parser_defaults: Dict[str, Any] = {}
    for key, value in defaults.items():
        if key not in CONFIG_DEFAULT_KEYS:
            raise ConfigurationError(f"Unknown key 'defaults.{key}' in '{config_file}'")
        dest, expected = CONFIG_DEFAULT_KEYS[key]
        # bool is a subclass of int, so 'count: true' has to be rejected explicitly
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            raise ConfigurationError(
                f"'defaults.{key}' in '{config_file}' must be of type {expected.__name__}"
            )
        if expected is int:
            value = max(1, value)
        parser_defaults[dest] = value

    level = logging_section.get("level")
    if level is not None:
        level = str(level).upper()
        if level not in LOG_LEVELS:
            raise ConfigurationError(f"Invalid logging.level '{level}' in '{config_file}'")
        parser_defaults["log_level"] = level

    logger.debug(f"Defaults from {config_file}: {parser_defaults}")
    return parser_defaults
