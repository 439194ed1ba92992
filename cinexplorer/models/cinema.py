import uuid
from sqlalchemy import Column, String, DateTime, Float, Uuid
from sqlalchemy.orm import relationship
from datetime import datetime
from cinexplorer.models import Base


class Cinema(Base):
    __tablename__ = "cinemas"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    address = Column(String(255), nullable=False)
    city = Column(String(100), nullable=False, index=True)
    state = Column(String(2), nullable=False)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    sessions = relationship("MovieSession", back_populates="cinema")
    promotions = relationship("Promotion", back_populates="cinema")
