import uuid
from sqlalchemy import Column, String, Integer, DateTime, Numeric, ForeignKey, CheckConstraint, Uuid
from sqlalchemy.orm import relationship
from datetime import datetime
from cinexplorer.models import Base


class Purchase(Base):
    __tablename__ = "purchases"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    session_id = Column(Uuid, ForeignKey("sessions.id", ondelete="RESTRICT"), nullable=False, index=True)
    ticket_type_id = Column(Uuid, ForeignKey("ticket_types.id", ondelete="RESTRICT"), nullable=True, index=True)
    user_email = Column(String(255), nullable=False, index=True)
    user_cpf = Column(String(14), nullable=True)
    quantity = Column(Integer, nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    session = relationship("MovieSession", back_populates="purchases")
    ticket_type = relationship("TicketType", back_populates="purchases")

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_purchase_quantity_positive"),
    )
