from datetime import date, datetime

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from cricketcoach.database import Base


class Booking(Base):
    __tablename__ = "bookings"
    # One booking per derived slot; the insert doubles as the availability lock
    __table_args__ = (UniqueConstraint("coach_id", "booking_date", "start_time"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    coach_id: Mapped[int] = mapped_column(ForeignKey("coaches.id"))
    client_name: Mapped[str] = mapped_column(String(100))
    client_email: Mapped[str] = mapped_column(String(255))
    booking_date: Mapped[date]
    start_time: Mapped[str] = mapped_column(String(5))  # HH:mm, coach timezone
    end_time: Mapped[str] = mapped_column(String(5))
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
