from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class CoachBase(BaseModel):
    name: str = Field(max_length=100)
    email: EmailStr


class CoachCreate(CoachBase):
    pass


class CoachRead(CoachBase):
    id: int
    created_at: datetime

    model_config = {"from_attributes": True}
