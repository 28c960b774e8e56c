import secrets

import bcrypt

DEFAULT_BCRYPT_ROUNDS = 10
SESSION_TOKEN_BYTES = 48
BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    # bcrypt only reads the first 72 bytes; current releases refuse longer input
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds)).decode("ascii")


def verify_password(plain: str, hashed: str) -> bool:
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(_encode(plain), hashed.encode("ascii"))
    except ValueError:
        # malformed stored hash
        return False


def generate_session_token() -> str:
    return secrets.token_hex(SESSION_TOKEN_BYTES)
