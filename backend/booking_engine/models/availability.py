# backend/booking_engine/models/availability.py
"""
Availability slot model.

A slot is a bookable window for one service on one date. Its ``capacity``
is the remaining number of seats: it is decremented when a booking is
created and restored when the booking is cancelled, and it is the only
contended counter for non-hotel bookings.

Times are stored as zero-padded ``HH:MM`` strings, which sort correctly
as plain strings.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.orm import relationship

from ..core.timezone_utils import utc_now
from ..core.ulid_helper import generate_ulid
from ..database import Base


class Availability(Base):
    __tablename__ = "availabilities"
    __table_args__ = (
        CheckConstraint("capacity >= 0", name="check_capacity_non_negative"),
        CheckConstraint("start_time < end_time", name="check_time_order"),
        Index("ix_availabilities_service_date", "service_id", "date"),
    )

    id = Column(String(26), primary_key=True, default=generate_ulid)
    service_id = Column(
        String(26), ForeignKey("services.id", ondelete="CASCADE"), nullable=False
    )
    date = Column(Date, nullable=False)
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)
    capacity = Column(Integer, nullable=False)
    # Overrides service.base_price when set
    price = Column(Numeric(10, 2), nullable=True)
    is_recurring = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utc_now)

    service = relationship("Service")

    def __repr__(self) -> str:
        return (
            f"<Availability {self.id}: service={self.service_id} {self.date} "
            f"{self.start_time}-{self.end_time} capacity={self.capacity}>"
        )
