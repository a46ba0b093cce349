from functools import lru_cache

import bcrypt

ROUNDS = 12


def hash_password(password, rounds=ROUNDS):
    """Generates a bcrypt hash for the password"""
    password_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password_bytes, salt).decode("utf-8")


def verify_password(password, hashed_password):
    if not isinstance(hashed_password, str):
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # malformed hash or over-long password
        return False


@lru_cache(maxsize=None)
def dummy_hash():
    """Hash checked for unknown users so the response time doesn't tell them apart."""
    return hash_password("unknown-user")
