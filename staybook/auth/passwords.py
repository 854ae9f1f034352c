"""Operator password checks with bcrypt.

The operator's password is configured as a bcrypt hash
(``AUTH_PASSWORD_HASH``); generate one with :func:`hash_password`.
"""

import bcrypt


def hash_password(password: str) -> str:
    """Return the bcrypt hash of ``password`` as text."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """True if ``plain_password`` matches ``hashed_password``.

    An empty or malformed hash never matches.
    """
    if not hashed_password:
        return False
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        return False
