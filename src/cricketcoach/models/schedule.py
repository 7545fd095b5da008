from datetime import datetime

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from cricketcoach.database import Base


class CoachSchedule(Base):
    __tablename__ = "coach_schedules"

    id: Mapped[int] = mapped_column(primary_key=True)
    coach_id: Mapped[int] = mapped_column(ForeignKey("coaches.id"), unique=True)
    timezone: Mapped[str] = mapped_column(String(64), default="UTC")  # IANA name
    default_duration: Mapped[int] = mapped_column(default=60)  # minutes
    booking_cutoff_hours: Mapped[int] = mapped_column(default=12)
    break_between_slots: Mapped[int] = mapped_column(default=0)  # minutes
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)


class ScheduleTimeRange(Base):
    __tablename__ = "schedule_time_ranges"

    id: Mapped[int] = mapped_column(primary_key=True)
    schedule_id: Mapped[int] = mapped_column(ForeignKey("coach_schedules.id"))
    day_of_week: Mapped[str] = mapped_column(String(10))  # monday..sunday
    start_time: Mapped[str] = mapped_column(String(5))  # HH:mm
    end_time: Mapped[str] = mapped_column(String(5))
    is_active: Mapped[bool] = mapped_column(default=True)
