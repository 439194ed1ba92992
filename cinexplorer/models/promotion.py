import uuid
from sqlalchemy import Column, String, Boolean, DateTime, Numeric, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from datetime import datetime
from cinexplorer.models import Base


class Promotion(Base):
    __tablename__ = "promotions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    description = Column(String(2000), nullable=False)
    discount_percentage = Column(Numeric(5, 2), nullable=False)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    cinema_id = Column(Uuid, ForeignKey("cinemas.id", ondelete="SET NULL"), nullable=True, index=True)
    movie_id = Column(Uuid, ForeignKey("movies.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    cinema = relationship("Cinema", back_populates="promotions")
    movie = relationship("Movie", back_populates="promotions")
