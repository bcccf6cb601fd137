# backend/booking_engine/models/room.py
"""Physical room of a HOTEL service."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from ..core.enums import RoomStatus
from ..core.timezone_utils import utc_now
from ..core.ulid_helper import generate_ulid
from ..database import Base


class Room(Base):
    __tablename__ = "rooms"
    __table_args__ = (
        UniqueConstraint("service_id", "number", name="uq_room_number_per_service"),
        CheckConstraint(
            "status IN ('AVAILABLE', 'OCCUPIED', 'CLEANING', 'MAINTENANCE', 'BLOCKED')",
            name="ck_rooms_status",
        ),
    )

    id = Column(String(26), primary_key=True, default=generate_ulid)
    service_id = Column(
        String(26), ForeignKey("services.id", ondelete="CASCADE"), nullable=False, index=True
    )
    number = Column(String(20), nullable=False)
    floor = Column(Integer, nullable=True)
    description = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default=RoomStatus.AVAILABLE.value)
    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(DateTime(timezone=True), onupdate=utc_now)

    service = relationship("Service", back_populates="rooms")

    def __repr__(self) -> str:
        return f"<Room {self.number} floor={self.floor} [{self.status}]>"
