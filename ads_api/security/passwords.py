"""Password hashing and verification with Argon2id."""

import logging
import re
from typing import Optional

from argon2 import PasswordHasher, exceptions
from argon2.low_level import Type

from ..config import ARGON2_MEMORY_COST, ARGON2_PARALLELISM, ARGON2_TIME_COST

logger = logging.getLogger(__name__)

_password_hasher = PasswordHasher(
    time_cost=ARGON2_TIME_COST,
    memory_cost=ARGON2_MEMORY_COST,
    parallelism=ARGON2_PARALLELISM,
    hash_len=32,
    type=Type.ID,
)


def hash_password(plain: str) -> str:
    """Hash a plaintext password using Argon2id."""
    return _password_hasher.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    if not isinstance(plain, str) or not isinstance(hashed, str) or not hashed.startswith("$argon2"):
        return False
    try:
        return _password_hasher.verify(hashed, plain)
    except exceptions.VerifyMismatchError:
        return False
    except exceptions.InvalidHashError:
        logger.debug("Invalid Argon2 hash format encountered during verification.")
        return False


_PASSWORD_RULES = (
    (r"[a-z]", "Password must contain at least one lowercase letter"),
    (r"[A-Z]", "Password must contain at least one uppercase letter"),
    (r"\d", "Password must contain at least one digit"),
    (r"[^a-zA-Z0-9]", "Password must contain at least one symbol (non-alphanumeric)"),
)


def password_policy_error(password: str) -> Optional[str]:
    """First password policy rule ``password`` breaks, or None."""
    if not 8 <= len(password) <= 128:
        return "Password must be 8-128 characters long"
    for pattern, message in _PASSWORD_RULES:
        if not re.search(pattern, password):
            return message
    return None
