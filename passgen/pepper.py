"""
Pepper tags for generated passphrases.

A pepper tag is a short suffix that lets anyone holding the pepper secret
confirm that a passphrase came from this generator, without the secret ever
appearing in the output:

    tag = base32(HMAC-SHA256(key=pepper, msg=passphrase))[:4]

The base-32 alphabet is RFC 4648 (A-Z, 2-7) without padding, so tags are
upper case and never contain 0, 1, 8 or 9.
"""

import base64
import hashlib
import hmac

TAG_LENGTH = 4
FALLBACK_TAG = "A" * TAG_LENGTH
BASE32_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"

def base32_encode_no_pad(data: bytes) -> str:
    """Encode bytes as RFC 4648 base-32 with the trailing '=' padding removed."""
    return base64.b32encode(data).decode("ascii").rstrip("=")


def derive_tag(passphrase: str, pepper: bytes) -> str:
    """
    Derive the 4-character tag for a passphrase.

    Args:
        passphrase: The passphrase exactly as printed, without its tag
        pepper: Secret key, must be non-empty (checked by the caller)

    Returns:
        str: TAG_LENGTH characters from BASE32_ALPHABET
    """
    digest = hmac.new(pepper, passphrase.encode("utf-8"), hashlib.sha256).digest()
    encoded = base32_encode_no_pad(digest)
    if len(encoded) < TAG_LENGTH:
        return FALLBACK_TAG
    return encoded[:TAG_LENGTH]

