from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Colony(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    name: str
    address: str | None = None
    created_at: datetime
    updated_at: datetime


class ColonyCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    address: str | None = Field(None, max_length=500)


class ColonyUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    address: str | None = Field(None, max_length=500, description="Set to null to clear")
