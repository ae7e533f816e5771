"""Password hashing utilities.

Passwords are hashed with PBKDF2-HMAC-SHA512 over a random per-user salt.
Both the hash and the salt are stored base64-encoded.
"""

import base64
import hashlib
import hmac
import secrets

PBKDF2_ITERATIONS = 10000
PBKDF2_KEY_LENGTH = 64
SALT_BYTES = 16


def generate_salt() -> str:
    """Generate a random base64-encoded salt."""
    return base64.b64encode(secrets.token_bytes(SALT_BYTES)).decode("ascii")


def hash_password(password: str, salt: str) -> str:
    """Hash a password with the given salt.

    Args:
        password: Plain-text password
        salt: Base64-encoded salt

    Returns:
        Base64-encoded derived key
    """
    derived = hashlib.pbkdf2_hmac(
        "sha512",
        password.encode("utf-8"),
        base64.b64decode(salt),
        PBKDF2_ITERATIONS,
        dklen=PBKDF2_KEY_LENGTH,
    )
    return base64.b64encode(derived).decode("ascii")


def verify_password(password: str, salt: str, password_hash: str) -> bool:
    """Check a password against a stored hash in constant time."""
    return hmac.compare_digest(hash_password(password, salt), password_hash)
