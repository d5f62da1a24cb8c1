"""Mutual interest resolution.

A match exists when the caller lists a name that belongs to a registered user
and that user lists the caller's username in return. The lookups are batched:
the caller's interests, the users those names resolve to, and the users who
name the caller are each fetched with one query, then intersected here.
"""
from crushmatch.services.identity_store import IdentityStore
from crushmatch.services.interest_store import InterestStore
from crushmatch.utils.exceptions import NotFound


class MatchResolver:
    def __init__(self, identities: IdentityStore, interests: InterestStore):
        self.identities = identities
        self.interests = interests

    async def resolve_matches(self, user_id: str) -> list[str]:
        user = await self.identities.resolve_by_id(user_id)
        if user is None:
            raise NotFound("User not found")

        my_interests = await self.interests.list_by_owner(user_id)
        if not my_interests:
            return []

        targets = await self.identities.resolve_many_by_username(i.name for i in my_interests)
        admirers = await self.interests.list_admirers(user.username)

        # Listed order and duplicates are kept; unknown names and unanswered
        # crushes are dropped alike.
        return [
            interest.name
            for interest in my_interests
            if targets.get(interest.name) in admirers
        ]
