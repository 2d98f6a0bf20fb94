"""
Password hashing and validation using argon2id.
"""

from __future__ import annotations

import argon2

_hasher = argon2.PasswordHasher(
    time_cost=2,
    memory_cost=65536,  # 64 MB
    parallelism=1,
    hash_len=32,
    salt_len=16,
    type=argon2.Type.ID,
)

MIN_LENGTH = 8
MAX_LENGTH = 128


class PasswordStrengthError(ValueError):
    """Raised when a password does not meet strength requirements."""


def hash_password(password: str) -> str:
    """Hash a password using argon2id. Returns the full hash string."""
    return _hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Return True if the password matches. Never raises on mismatch."""
    try:
        return _hasher.verify(password_hash, password)
    except (argon2.exceptions.VerifyMismatchError, argon2.exceptions.InvalidHashError):
        return False


def check_needs_rehash(password_hash: str) -> bool:
    """Check if the hash was produced with outdated parameters."""
    return _hasher.check_needs_rehash(password_hash)


def password_problems(password: str) -> list[str]:
    """Return every strength rule the password breaks, in display order."""
    problems = []
    if len(password) < MIN_LENGTH:
        problems.append(f"Password must be at least {MIN_LENGTH} characters long")
    if len(password) > MAX_LENGTH:
        problems.append(f"Password must not exceed {MAX_LENGTH} characters")
    if not (
        any(c.isupper() for c in password)
        and any(c.islower() for c in password)
        and any(c.isdigit() for c in password)
    ):
        problems.append("Password must contain at least one uppercase letter, one lowercase letter, and one number")
    return problems


def validate_password_strength(password: str) -> None:
    """
    Validate password meets minimum strength requirements.

    Requirements:
    - 8 to 128 characters
    - At least one uppercase letter, one lowercase letter and one digit

    Raises:
        PasswordStrengthError: With all broken rules joined by ". ".
    """
    problems = password_problems(password)
    if problems:
        raise PasswordStrengthError(". ".join(problems))
