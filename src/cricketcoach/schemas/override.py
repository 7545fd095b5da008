from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field, model_validator


class OverrideOptions(BaseModel):
    refund: bool = True
    reschedule: bool = True
    cancel: bool = True


class EmergencyOverrideCreate(BaseModel):
    override_date: date
    reason: str = Field(min_length=1, max_length=500)
    options: OverrideOptions = Field(default_factory=OverrideOptions)


class EmergencyOverrideRead(EmergencyOverrideCreate):
    id: int
    coach_id: int
    created_at: datetime

    model_config = {"from_attributes": True}

    @model_validator(mode="before")
    @classmethod
    def _collect_options(cls, data: Any) -> Any:
        # ORM rows keep the options as flat columns
        if isinstance(data, dict) or hasattr(data, "options"):
            return data
        return {
            "id": data.id,
            "coach_id": data.coach_id,
            "override_date": data.override_date,
            "reason": data.reason,
            "options": {
                "refund": data.refund,
                "reschedule": data.reschedule,
                "cancel": data.cancel,
            },
            "created_at": data.created_at,
        }
