from fastapi import APIRouter, Depends

from crushmatch.dependencies import ensure_same_user, get_current_user_id, get_interest_store
from crushmatch.schemas.crush import CrushCreate, CrushResponse
from crushmatch.services.interest_store import InterestStore

router = APIRouter(prefix="/crush", tags=["crushes"])


@router.post("", status_code=201)
async def add_crush(
    payload: CrushCreate,
    current_user_id: str = Depends(get_current_user_id),
    interests: InterestStore = Depends(get_interest_store),
):
    interest = await interests.add(current_user_id, payload.name)
    return CrushResponse.model_validate(interest).model_dump(by_alias=True)


@router.get("/{user_id}")
async def list_crushes(
    user_id: str,
    current_user_id: str = Depends(get_current_user_id),
    interests: InterestStore = Depends(get_interest_store),
):
    ensure_same_user(user_id, current_user_id)
    crushes = await interests.list_by_owner(user_id)
    return [CrushResponse.model_validate(c).model_dump(by_alias=True) for c in crushes]
