import uuid
from sqlalchemy import Column, String, Integer, DateTime, Numeric, ForeignKey, CheckConstraint, Uuid
from sqlalchemy.orm import relationship
from datetime import datetime
from cinexplorer.models import Base
from cinexplorer.config import settings


class MovieSession(Base):
    """A scheduled screening of a movie in a cinema room."""

    __tablename__ = "sessions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    cinema_id = Column(Uuid, ForeignKey("cinemas.id", ondelete="RESTRICT"), nullable=False, index=True)
    movie_id = Column(Uuid, ForeignKey("movies.id", ondelete="RESTRICT"), nullable=False, index=True)
    date_time = Column(DateTime, nullable=False, index=True)
    room_type = Column(String(50), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    capacity = Column(Integer, nullable=False, default=lambda: settings.SESSION_CAPACITY)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    cinema = relationship("Cinema", back_populates="sessions")
    movie = relationship("Movie", back_populates="sessions")
    purchases = relationship("Purchase", back_populates="session")

    __table_args__ = (
        CheckConstraint("price > 0", name="ck_session_price_positive"),
        CheckConstraint("capacity >= 0", name="ck_session_capacity_non_negative"),
    )
