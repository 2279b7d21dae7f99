"""Password hashing helpers."""

import hashlib


def hash_password(password: str) -> str:
    """Return the sha512 hex digest stored in place of the plaintext password."""
    return hashlib.sha512(password.encode("utf-8")).hexdigest()
