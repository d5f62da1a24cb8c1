from fastapi import APIRouter, Depends

from crushmatch.dependencies import get_identity_store
from crushmatch.schemas.auth import Credentials, LoginResponse, MessageResponse
from crushmatch.services.identity_store import IdentityStore

router = APIRouter(tags=["auth"])


@router.post("/register", status_code=201)
async def register(payload: Credentials, identities: IdentityStore = Depends(get_identity_store)):
    await identities.register(payload.username, payload.password)
    return MessageResponse(message="User registered successfully").model_dump()


@router.post("/login")
async def login(payload: Credentials, identities: IdentityStore = Depends(get_identity_store)):
    user_id, token = await identities.authenticate(payload.username, payload.password)
    return LoginResponse(token=token, user_id=user_id).model_dump(by_alias=True)


@router.post("/logout")
async def logout():
    # Tokens are stateless; the client discards its copy and it expires on its own.
    return MessageResponse(message="Logged out").model_dump()
