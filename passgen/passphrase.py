import hmac
import logging
import secrets
from random import Random
from typing import Iterator, List, Optional

from passgen.errors import SelectionError, WordListError
from passgen.pepper import TAG_LENGTH, derive_tag

logger = logging.getLogger(__name__)

SEPARATOR = "-"
NUMBER_MAX = 9999


def load_wordlist(filepath: str) -> List[str]:
    """Load a word list, one word per line, skipping blank lines and repeats."""
    try:
        with open(filepath, encoding="utf-8") as wordlist:
            words = [line.strip() for line in wordlist]
    except OSError as e:
        raise WordListError(f"Failed to open word list: {filepath} ({e.strerror})") from e
    except UnicodeDecodeError as e:
        raise WordListError(f"Word list is not valid UTF-8: {filepath}") from e

    # dict.fromkeys keeps the first occurrence of each word in file order
    unique = list(dict.fromkeys(w for w in words if w))
    logger.info(f"Loaded {len(unique)} words from {filepath}")
    return unique


def capitalize_first(word: str) -> str:
    """Uppercase the first character only; str.capitalize would lowercase the rest."""
    return word[:1].upper() + word[1:]


def append_tag(passphrase: str, pepper: bytes) -> str:
    """Return the passphrase with its pepper tag appended."""
    return f"{passphrase}{SEPARATOR}{derive_tag(passphrase, pepper)}"


def verify_tag(tagged: str, pepper: bytes) -> bool:
    """Check that the last component of a tagged passphrase matches its pepper tag."""
    base, sep, tag = tagged.strip().rpartition(SEPARATOR)
    if not sep or not base or len(tag) != TAG_LENGTH or not tag.isascii():
        return False
    return hmac.compare_digest(derive_tag(base, pepper), tag.upper())


def select_words(words: List[str], count: int, rng: Random) -> List[str]:
    """Pick count distinct words uniformly at random, without replacement."""
    picked = rng.sample(words, count)
    if len(picked) < count:
        raise SelectionError(count, len(picked))
    return picked


def generate_passphrase(
    words: List[str],
    words_per_password: int,
    capitalize: bool = True,
    pepper: Optional[bytes] = None,
    rng: Optional[Random] = None,
) -> str:
    """Generate a single passphrase: Word-Word-NNNN, plus -TAG when a pepper is given."""
    rng = rng or secrets.SystemRandom()
    picked = select_words(words, words_per_password, rng)
    if capitalize:
        picked = [capitalize_first(w) for w in picked]

    number = rng.randint(0, NUMBER_MAX)
    passphrase = SEPARATOR.join(picked) + f"{SEPARATOR}{number:04d}"
    if pepper:
        passphrase = append_tag(passphrase, pepper)
    return passphrase


def generate_passphrases(
    words: List[str],
    words_per_password: int,
    count: int = 5,
    capitalize: bool = True,
    pepper: Optional[bytes] = None,
    rng: Optional[Random] = None,
) -> Iterator[str]:
    """
    Generate count passphrases lazily.

    Arguments are validated before the first passphrase is produced, so a bad
    request yields nothing at all.
    """
    if words_per_password < 1:
        raise ValueError("Words per passphrase must be a positive integer")
    if count < 1:
        raise ValueError("Count must be a positive integer")
    if len(words) < words_per_password:
        raise WordListError(
            f"Word list must contain at least {words_per_password} distinct words "
            f"(found {len(words)})."
        )

    rng = rng or secrets.SystemRandom()
    return (
        generate_passphrase(words, words_per_password, capitalize, pepper, rng)
        for _ in range(count)
    )
