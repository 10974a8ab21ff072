"""Password hashing with PBKDF2-HMAC-SHA256.

Stored format is ``<salt hex>$<hash hex>``.
"""

import hashlib
import hmac
import os

PBKDF2_ITERATIONS = 100_000


def hash_password(password: str) -> str:
    """Hash a password with a fresh 16-byte salt."""
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Constant-time check of a password against a stored salt+hash string."""
    try:
        salt_hex, hash_hex = hashed_password.split("$", 1)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    dk = hashlib.pbkdf2_hmac(
        "sha256", plain_password.encode("utf-8"), salt, PBKDF2_ITERATIONS,
    )
    return hmac.compare_digest(dk, stored_hash)
