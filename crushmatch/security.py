"""Password hashing and bearer token helpers.

Thin wrappers over :mod:`bcrypt` and :mod:`jwt` so the identity store never
touches either library directly.
"""
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from crushmatch.config import settings

# bcrypt only looks at the first 72 bytes of a secret
_BCRYPT_MAX_BYTES = 72


def _encode_secret(secret: str) -> bytes:
    return secret.encode()[:_BCRYPT_MAX_BYTES]


def hash_password(secret: str) -> str:
    return bcrypt.hashpw(_encode_secret(secret), bcrypt.gensalt()).decode()


def verify_password(secret: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_encode_secret(secret), password_hash.encode())
    except ValueError:
        # malformed stored hash
        return False


def create_access_token(user_id: str, expires_delta: timedelta | None = None) -> str:
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    now = datetime.now(timezone.utc)
    payload = {"sub": user_id, "iat": now, "exp": now + expires_delta}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> str:
    """Return the user id carried by ``token``.

    Raises :class:`jwt.InvalidTokenError` (or a subclass such as
    :class:`jwt.ExpiredSignatureError`) when the token cannot be trusted.
    """
    payload = jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=[settings.jwt_algorithm],
        options={"require": ["sub", "exp"]},
    )
    user_id = payload["sub"]
    if not isinstance(user_id, str) or not user_id:
        raise jwt.InvalidTokenError("Token subject is not a user id")
    return user_id
