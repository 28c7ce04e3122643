"""Admin password hashing with scrypt.

Stored format is ``"<salt_hex>:<key_hex>"``: a fresh 16-byte random salt
(hex-encoded, and the hex text itself is what feeds scrypt) and a 64-byte
derived key.  Cost parameters are N=16384, r=8, p=1.
"""

import secrets

from cryptography.exceptions import InvalidKey
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

SALT_BYTES = 16
KEY_LENGTH = 64
SCRYPT_N = 2**14
SCRYPT_R = 8
SCRYPT_P = 1


def _kdf(salt: str) -> Scrypt:
    # A Scrypt instance is single-use: build one per derive/verify
    return Scrypt(
        salt=salt.encode("utf-8"),
        length=KEY_LENGTH,
        n=SCRYPT_N,
        r=SCRYPT_R,
        p=SCRYPT_P,
    )


def hash_password(password: str) -> str:
    """Hash ``password`` with a new random salt."""
    salt = secrets.token_hex(SALT_BYTES)
    key = _kdf(salt).derive(password.encode("utf-8"))
    return f"{salt}:{key.hex()}"


def verify_password(password: str, stored_hash: str) -> bool:
    """Check ``password`` against a stored hash.

    The KDF compares keys in constant time.  Malformed stored hashes verify
    as ``False`` instead of raising.
    """
    salt, _, key_hex = stored_hash.partition(":")
    if not (salt and key_hex):
        return False
    try:
        expected = bytes.fromhex(key_hex)
    except ValueError:
        return False
    try:
        _kdf(salt).verify(password.encode("utf-8"), expected)
    except InvalidKey:
        return False
    return True
