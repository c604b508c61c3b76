"""Security utilities - password hashing, tokens and input validators.

Re-exports all security-related helpers for convenience.
"""

from src.ems.core.security.crypto import PasswordHasher
from src.ems.core.security.tokens import TokenService, TokenType
from src.ems.core.security.validators import (
    validate_password_strength,
    validate_time_of_day,
)

__all__ = [
    # Crypto
    "PasswordHasher",
    # Tokens
    "TokenService",
    "TokenType",
    # Validators
    "validate_password_strength",
    "validate_time_of_day",
]
