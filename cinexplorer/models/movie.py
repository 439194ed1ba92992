import uuid
from sqlalchemy import Column, String, Integer, DateTime, Text, Uuid
from sqlalchemy.orm import relationship
from datetime import datetime
from cinexplorer.models import Base


class Movie(Base):
    __tablename__ = "movies"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False, index=True)
    genre = Column(String(100), nullable=False)
    duration = Column(Integer, nullable=False)
    rating = Column(String(50), nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(String(1000), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    sessions = relationship("MovieSession", back_populates="movie")
    promotions = relationship("Promotion", back_populates="movie")
