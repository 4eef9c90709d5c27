"""
Verification code generation and hashing.

Codes are stored as bcrypt hashes only. Hashing is CPU-bound, so it runs
in a worker thread to keep the event loop free.
"""

import asyncio
import secrets

import bcrypt

CODE_MIN = 100000
CODE_MAX = 999999
BCRYPT_ROUNDS = 10


def generate_code() -> str:
    """Uniformly random 6-digit code in 100000..999999 (never a leading zero)."""
    return str(CODE_MIN + secrets.randbelow(CODE_MAX - CODE_MIN + 1))


def _hash(code: str) -> str:
    return bcrypt.hashpw(code.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def _matches(code: str, code_hash: str) -> bool:
    try:
        return bcrypt.checkpw(code.encode("utf-8"), code_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


async def hash_code(code: str) -> str:
    """Hash a code for storage."""
    return await asyncio.to_thread(_hash, code)


async def code_matches(code: str, code_hash: str) -> bool:
    """Compare a submitted code against a stored hash."""
    return await asyncio.to_thread(_matches, code, code_hash)
