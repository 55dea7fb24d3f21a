"""
Password hashing utilities
"""

import base64
import hashlib
import hmac
import secrets
from typing import Optional

ALGORITHM = "pbkdf2_sha256"


def _derive(password: str, salt: str, iterations: int) -> str:
    hashed = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), iterations)
    return base64.b64encode(hashed).decode("utf-8")


def hash_password(password: str, salt: Optional[str] = None, iterations: Optional[int] = None) -> str:
    """Hash a password with salt.

    The result is a self-describing string ``pbkdf2_sha256$<iterations>$<salt>$<hash>``
    so it fits a single column and survives changes to the configured iteration count.
    """
    if salt is None:
        salt = secrets.token_hex(16)
    if iterations is None:
        from .settings import get_settings

        iterations = get_settings().security.password_iterations

    return f"{ALGORITHM}${iterations}${salt}${_derive(password, salt, iterations)}"


def verify_password(password: str, encoded: str) -> bool:
    """Verify a password against a string produced by :func:`hash_password`"""
    try:
        algorithm, iterations, salt, expected = encoded.split("$", 3)
        rounds = int(iterations)
    except (AttributeError, ValueError):
        return False

    if algorithm != ALGORITHM:
        return False

    return hmac.compare_digest(_derive(password, salt, rounds), expected)
