"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor.
"""

from __future__ import annotations

import asyncio

import bcrypt

DEFAULT_ROUNDS = 10

# bcrypt only looks at the first 72 bytes; newer releases raise instead of
# truncating, so cut the input here to keep long passphrases usable.
_MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode()[:_MAX_PASSWORD_BYTES]


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash a password with bcrypt (auto-salted, work factor ``rounds``)."""
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode())
    except (ValueError, TypeError):
        return False


async def hash_password_async(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """``hash_password`` on a worker thread so the event loop keeps serving."""
    return await asyncio.to_thread(hash_password, password, rounds)


async def verify_password_async(password: str, password_hash: str) -> bool:
    return await asyncio.to_thread(verify_password, password, password_hash)
