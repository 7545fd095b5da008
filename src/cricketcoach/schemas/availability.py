import datetime as dt

from pydantic import BaseModel


class BookableSlot(BaseModel):
    day: str
    date: dt.date
    start_time: str
    end_time: str
    starts_at: dt.datetime  # UTC instant of start_time in the coach's timezone


class TimeCheckRead(BaseModel):
    day: str
    start_time: str
    end_time: str
    available: bool
