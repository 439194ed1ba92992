import uuid
from sqlalchemy import Column, String, DateTime, Uuid
from datetime import datetime
from cinexplorer.models import Base


class Admin(Base):
    __tablename__ = "admins"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
