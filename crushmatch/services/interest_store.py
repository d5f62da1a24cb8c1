"""Directed interest ("crush") edges."""
import uuid
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from crushmatch.models.interest import Interest
from crushmatch.services.identity_store import IdentityStore
from crushmatch.utils.exceptions import InvalidInput, NotFound


class InterestStore:
    def __init__(self, session: AsyncSession, identities: IdentityStore):
        self.session = session
        self.identities = identities

    async def add(self, owner_id: str, target_name: str) -> Interest:
        # No uniqueness: the same name may be recorded more than once.
        target_name = (target_name or "").strip()
        if not target_name:
            raise InvalidInput("Name is required")
        if await self.identities.resolve_by_id(owner_id) is None:
            raise NotFound("User not found")

        interest = Interest(
            id=str(uuid.uuid4()),
            user_id=owner_id,
            name=target_name,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        self.session.add(interest)
        await self.session.commit()
        await self.session.refresh(interest)
        return interest

    async def list_by_owner(self, owner_id: str) -> list[Interest]:
        result = await self.session.execute(
            select(Interest)
            .where(Interest.user_id == owner_id)
            .order_by(Interest.seq)
        )
        return list(result.scalars().all())

    async def find_reciprocal(self, owner_id: str, target_name: str) -> Interest | None:
        """Return an interest held by ``target_name`` that names ``owner_id`` back."""
        owner = await self.identities.resolve_by_id(owner_id)
        if owner is None:
            return None
        target_id = await self.identities.resolve_by_username(target_name)
        if target_id is None:
            return None

        result = await self.session.execute(
            select(Interest)
            .where(Interest.user_id == target_id, Interest.name == owner.username)
            .limit(1)
        )
        return result.scalars().first()

    async def list_admirers(self, username: str) -> set[str]:
        """Ids of every user who has recorded ``username`` as a crush."""
        result = await self.session.execute(
            select(Interest.user_id).where(Interest.name == username).distinct()
        )
        return set(result.scalars().all())
