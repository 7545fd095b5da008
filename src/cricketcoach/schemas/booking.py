from datetime import date, datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from cricketcoach.scheduling.timeutils import TIME_PATTERN, normalize_time


class BookingBase(BaseModel):
    client_name: str = Field(max_length=100)
    client_email: EmailStr
    booking_date: date
    start_time: str = Field(pattern=TIME_PATTERN)
    end_time: str = Field(pattern=TIME_PATTERN)


class BookingCreate(BookingBase):
    @field_validator("start_time", "end_time")
    @classmethod
    def _zero_pad(cls, value: str) -> str:
        return normalize_time(value)


class BookingRead(BookingBase):
    id: int
    coach_id: int
    created_at: datetime

    model_config = {"from_attributes": True}
