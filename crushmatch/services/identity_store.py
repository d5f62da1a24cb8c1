"""Registered users and authentication."""
import logging
import uuid
from datetime import datetime, timezone
from typing import Iterable

import jwt
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from crushmatch.models.user import User
from crushmatch.security import create_access_token, decode_access_token, hash_password, verify_password
from crushmatch.utils.exceptions import Conflict, InvalidCredentials, InvalidInput, Unauthorized

logger = logging.getLogger(__name__)


class IdentityStore:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def register(self, username: str, secret: str) -> str:
        """Create a user and return its id.

        Both fields are trimmed first; an empty value raises ``InvalidInput``
        and a taken username raises ``Conflict``. The unique index on
        ``users.username`` catches registrations that race past the lookup.
        """
        username = (username or "").strip()
        secret = (secret or "").strip()
        if not username or not secret:
            raise InvalidInput("Username and password are required")

        if await self.resolve_by_username(username) is not None:
            raise Conflict("User already exists")

        user = User(
            id=str(uuid.uuid4()),
            username=username,
            password_hash=hash_password(secret),
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        self.session.add(user)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise Conflict("User already exists")

        logger.info("Registered user %s", user.id)
        return user.id

    async def authenticate(self, username: str, secret: str) -> tuple[str, str]:
        """Check credentials and return ``(user_id, token)``."""
        username = (username or "").strip()
        secret = (secret or "").strip()

        result = await self.session.execute(select(User).where(User.username == username))
        user = result.scalars().first()

        if user is None or not verify_password(secret, user.password_hash):
            logger.info("Failed login for username %r", username)
            raise InvalidCredentials()

        return user.id, create_access_token(user.id)

    async def resolve_by_username(self, username: str) -> str | None:
        result = await self.session.execute(select(User.id).where(User.username == username))
        return result.scalars().first()

    async def resolve_many_by_username(self, usernames: Iterable[str]) -> dict[str, str]:
        names = set(usernames)
        if not names:
            return {}
        result = await self.session.execute(
            select(User.username, User.id).where(User.username.in_(names))
        )
        return {username: user_id for username, user_id in result.all()}

    async def resolve_by_id(self, user_id: str) -> User | None:
        return await self.session.get(User, user_id)

    @staticmethod
    def verify_token(token: str) -> str:
        try:
            return decode_access_token(token)
        except jwt.ExpiredSignatureError:
            raise Unauthorized("Token expired")
        except jwt.InvalidTokenError:
            raise Unauthorized("Invalid token")
