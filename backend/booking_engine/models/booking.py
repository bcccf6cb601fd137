# backend/booking_engine/models/booking.py
"""
Booking model for the reservation engine.

A booking reserves either seats on an availability slot (SERVICE) or a
room for a date range (HOTEL). Bookings are never physically deleted:
cancellation is a status change with compensating capacity/room updates.

Extra items are snapshotted per line (``price_at_booking``) so later
price edits never rewrite historical bookings.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from ..core.enums import BookingStatus
from ..core.timezone_utils import utc_now
from ..core.ulid_helper import generate_ulid
from ..database import Base


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint(
            "status IN ('PENDING', 'CONFIRMED', 'CANCELLED', 'CHECKED_IN', 'CHECKED_OUT', 'NO_SHOW')",
            name="ck_bookings_status",
        ),
        CheckConstraint("quantity > 0", name="check_quantity_positive"),
        CheckConstraint("total_price >= 0", name="check_price_non_negative"),
        Index("ix_bookings_room_dates", "room_id", "check_in_date", "check_out_date"),
    )

    id = Column(String(26), primary_key=True, default=generate_ulid)

    # Core relationships
    user_id = Column(String(26), nullable=False, index=True)
    establishment_id = Column(
        String(26), ForeignKey("establishments.id"), nullable=False, index=True
    )
    service_id = Column(String(26), ForeignKey("services.id"), nullable=False)
    availability_id = Column(String(26), ForeignKey("availabilities.id"), nullable=False, index=True)

    quantity = Column(Integer, nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)
    status = Column(String(20), nullable=False, default=BookingStatus.CONFIRMED.value, index=True)

    # Hotel stay
    check_in_date = Column(Date, nullable=True)
    check_out_date = Column(Date, nullable=True)
    room_id = Column(String(26), ForeignKey("rooms.id"), nullable=True)
    number_of_nights = Column(Integer, nullable=True)
    number_of_guests = Column(Integer, nullable=True)

    # Guest details for third-party bookings
    guest_name = Column(String(255), nullable=True)
    guest_email = Column(String(255), nullable=True)
    guest_phone = Column(String(50), nullable=True)
    guest_document = Column(String(100), nullable=True)
    notes = Column(Text, nullable=True)

    # Lifecycle timestamps
    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(DateTime(timezone=True), onupdate=utc_now)
    confirmed_at = Column(DateTime(timezone=True), nullable=True)
    cancelled_at = Column(DateTime(timezone=True), nullable=True)
    cancellation_reason = Column(Text, nullable=True)
    checked_in_at = Column(DateTime(timezone=True), nullable=True)
    checked_out_at = Column(DateTime(timezone=True), nullable=True)

    service = relationship("Service")
    availability = relationship("Availability")
    room = relationship("Room")
    extra_items = relationship(
        "BookingExtraItem",
        back_populates="booking",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return (
            f"<Booking {self.id}: user={self.user_id}, service={self.service_id}, "
            f"quantity={self.quantity}, status={self.status}>"
        )


class BookingExtraItem(Base):
    """One extra line on a booking with its price frozen at creation time."""

    __tablename__ = "booking_extra_items"
    __table_args__ = (CheckConstraint("quantity > 0", name="check_extra_line_quantity_positive"),)

    id = Column(String(26), primary_key=True, default=generate_ulid)
    booking_id = Column(
        String(26), ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    extra_item_id = Column(String(26), ForeignKey("extra_items.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    price_at_booking = Column(Numeric(10, 2), nullable=False)

    booking = relationship("Booking", back_populates="extra_items")
    extra_item = relationship("ExtraItem")
