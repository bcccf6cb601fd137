# backend/booking_engine/models/service.py
"""
Bookable services and their optional paid extras.

Both support soft delete via the ``active`` flag so historical bookings
keep resolving the service and extra items they reference.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from ..core.enums import ServiceType
from ..core.timezone_utils import utc_now
from ..core.ulid_helper import generate_ulid
from ..database import Base


class Service(Base):
    """
    A bookable offering owned by an establishment.

    Attributes:
        base_price: Unit price; per seat for SERVICE, per night for HOTEL
        duration_minutes: Nominal length of one session
        capacity: Default seats per slot (informational for the engine)
        type: SERVICE (seats against slot capacity) or HOTEL (rooms by date range)
        active: Only active services may be booked
    """

    __tablename__ = "services"
    __table_args__ = (
        CheckConstraint("type IN ('SERVICE', 'HOTEL')", name="ck_services_type"),
        CheckConstraint("base_price >= 0", name="check_base_price_non_negative"),
    )

    id = Column(String(26), primary_key=True, default=generate_ulid)
    establishment_id = Column(
        String(26), ForeignKey("establishments.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    base_price = Column(Numeric(10, 2), nullable=False)
    duration_minutes = Column(Integer, nullable=False, default=60)
    capacity = Column(Integer, nullable=False, default=1)
    type = Column(String(20), nullable=False, default=ServiceType.SERVICE.value)
    active = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(DateTime(timezone=True), onupdate=utc_now)

    establishment = relationship("Establishment", back_populates="services")
    extra_items = relationship("ExtraItem", back_populates="service")
    rooms = relationship("Room", back_populates="service")

    @property
    def is_hotel(self) -> bool:
        return self.type == ServiceType.HOTEL.value

    def __repr__(self) -> str:
        status = " (inactive)" if not self.active else ""
        return f"<Service {self.name} [{self.type}] {self.base_price}{status}>"


class ExtraItem(Base):
    """Optional add-on attachable to a booking of its service."""

    __tablename__ = "extra_items"
    __table_args__ = (
        CheckConstraint("price >= 0", name="check_extra_price_non_negative"),
        CheckConstraint("max_quantity >= 1", name="check_extra_max_quantity_positive"),
    )

    id = Column(String(26), primary_key=True, default=generate_ulid)
    service_id = Column(
        String(26), ForeignKey("services.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    max_quantity = Column(Integer, nullable=False, default=1)
    active = Column(Boolean, nullable=False, default=True)

    service = relationship("Service", back_populates="extra_items")

    def __repr__(self) -> str:
        return f"<ExtraItem {self.name} {self.price} max={self.max_quantity}>"
