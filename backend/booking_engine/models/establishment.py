# backend/booking_engine/models/establishment.py
"""
Establishment (tenant) model and its per-user role assignments.

Only the columns the booking engine needs are modelled here; onboarding
and profile management live elsewhere.
"""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import relationship

from ..core.timezone_utils import utc_now
from ..core.ulid_helper import generate_ulid
from ..database import Base


class Establishment(Base):
    __tablename__ = "establishments"

    id = Column(String(26), primary_key=True, default=generate_ulid)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now)

    members = relationship(
        "EstablishmentMember", back_populates="establishment", cascade="all, delete-orphan"
    )
    services = relationship("Service", back_populates="establishment")

    def __repr__(self) -> str:
        return f"<Establishment {self.id}: {self.name}>"


class EstablishmentMember(Base):
    """A user's OWNER or STAFF role within one establishment."""

    __tablename__ = "establishment_members"
    __table_args__ = (
        UniqueConstraint("establishment_id", "user_id", name="uq_establishment_member"),
        CheckConstraint("role IN ('OWNER', 'STAFF')", name="ck_establishment_members_role"),
    )

    id = Column(String(26), primary_key=True, default=generate_ulid)
    establishment_id = Column(
        String(26), ForeignKey("establishments.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(String(26), nullable=False, index=True)
    role = Column(String(10), nullable=False)

    establishment = relationship("Establishment", back_populates="members")
