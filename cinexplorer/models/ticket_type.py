import uuid
from sqlalchemy import Column, String, Boolean, DateTime, Numeric, CheckConstraint, Uuid
from sqlalchemy.orm import relationship
from datetime import datetime
from cinexplorer.models import Base


class TicketType(Base):
    __tablename__ = "ticket_types"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    description = Column(String(1000), nullable=False)
    discount_percentage = Column(Numeric(5, 2), nullable=False, default=0)
    requires_proof = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    purchases = relationship("Purchase", back_populates="ticket_type")

    __table_args__ = (
        CheckConstraint(
            "discount_percentage >= 0 AND discount_percentage <= 100",
            name="ck_ticket_type_discount_range",
        ),
    )
