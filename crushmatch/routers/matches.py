from fastapi import APIRouter, Depends

from crushmatch.dependencies import ensure_same_user, get_current_user_id, get_match_resolver
from crushmatch.schemas.crush import MatchesResponse
from crushmatch.services.match_resolver import MatchResolver

router = APIRouter(prefix="/matches", tags=["matches"])


@router.get("/{user_id}")
async def get_matches(
    user_id: str,
    current_user_id: str = Depends(get_current_user_id),
    resolver: MatchResolver = Depends(get_match_resolver),
):
    ensure_same_user(user_id, current_user_id)
    matches = await resolver.resolve_matches(user_id)
    return MatchesResponse(matches=matches).model_dump()
