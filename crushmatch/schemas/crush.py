from pydantic import BaseModel, ConfigDict, Field


class CrushCreate(BaseModel):
    name: str


class CrushResponse(BaseModel):
    id: str
    name: str
    user_id: str = Field(serialization_alias="userId")
    created_at: str = Field(serialization_alias="createdAt")

    model_config = ConfigDict(from_attributes=True)


class MatchesResponse(BaseModel):
    matches: list[str]
