from datetime import date, datetime

from sqlalchemy import ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from cricketcoach.database import Base


class EmergencyOverride(Base):
    __tablename__ = "emergency_overrides"
    __table_args__ = (UniqueConstraint("coach_id", "override_date"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    coach_id: Mapped[int] = mapped_column(ForeignKey("coaches.id"))
    override_date: Mapped[date]
    reason: Mapped[str] = mapped_column(Text)
    # Remediation options advertised to affected clients
    refund: Mapped[bool] = mapped_column(default=True)
    reschedule: Mapped[bool] = mapped_column(default=True)
    cancel: Mapped[bool] = mapped_column(default=True)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
