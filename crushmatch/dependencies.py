from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from crushmatch.services.identity_store import IdentityStore
from crushmatch.services.interest_store import InterestStore
from crushmatch.services.match_resolver import MatchResolver
from crushmatch.utils.exceptions import Forbidden, Unauthorized

_bearer = HTTPBearer(auto_error=False)


async def get_db(request: Request):
    async with request.app.state.database.session() as session:
        yield session


def get_identity_store(db: AsyncSession = Depends(get_db)) -> IdentityStore:
    return IdentityStore(db)


def get_interest_store(
    db: AsyncSession = Depends(get_db),
    identities: IdentityStore = Depends(get_identity_store),
) -> InterestStore:
    return InterestStore(db, identities)


def get_match_resolver(
    identities: IdentityStore = Depends(get_identity_store),
    interests: InterestStore = Depends(get_interest_store),
) -> MatchResolver:
    return MatchResolver(identities, interests)


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> str:
    if credentials is None:
        raise Unauthorized("Missing bearer token")
    return IdentityStore.verify_token(credentials.credentials)


def ensure_same_user(path_user_id: str, current_user_id: str) -> None:
    if path_user_id != current_user_id:
        raise Forbidden("Not allowed to access another user's data")
