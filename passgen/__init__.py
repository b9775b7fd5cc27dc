"""Memorable passphrase generator with optional pepper tags."""

from passgen.passphrase import (
    append_tag,
    generate_passphrase,
    generate_passphrases,
    load_wordlist,
    verify_tag,
)
from passgen.pepper import derive_tag

__version__ = "1.0.0"
