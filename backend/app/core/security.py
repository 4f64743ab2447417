"""
Password hashing and operator credential checks.

The ledger has exactly one operator account. Its username and password (or a
pre-computed bcrypt hash) come from settings.
"""

from functools import lru_cache
from typing import Optional
import bcrypt
from backend.app.core.config import settings


def get_password_hash(password: str) -> str:
    """Hash a plain password with a fresh bcrypt salt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain password against a bcrypt hash. Malformed hashes never match."""
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        return False


@lru_cache(maxsize=8)
def _hash_configured_password(password: str) -> str:
    return get_password_hash(password)


def get_operator_password_hash() -> str:
    """
    Return the bcrypt hash for the operator account.

    An explicit `admin_password_hash` wins; otherwise the configured plain
    password is hashed once and cached.
    """
    if settings.admin_password_hash:
        return settings.admin_password_hash
    return _hash_configured_password(settings.admin_password)


def is_operator(username: Optional[str]) -> bool:
    return bool(username) and username == settings.admin_username
