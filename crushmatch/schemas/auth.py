from pydantic import BaseModel, Field


class Credentials(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    token: str
    user_id: str = Field(serialization_alias="userId")


class MessageResponse(BaseModel):
    message: str
