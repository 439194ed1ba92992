from pydantic import EmailStr, Field
from typing import Optional
from datetime import datetime
from uuid import UUID

from cinexplorer.config import settings
from cinexplorer.schemas.common import CamelSchema
from cinexplorer.schemas.session import SessionResponseSchema
from cinexplorer.schemas.cinema import CinemaMinimalSchema


class PurchaseCreateSchema(CamelSchema):
    session_id: UUID
    user_email: EmailStr
    user_cpf: Optional[str] = Field(default=None, pattern=r"^\d{3}\.?\d{3}\.?\d{3}-?\d{2}$")
    quantity: int = Field(..., ge=1, le=settings.MAX_TICKETS_PER_PURCHASE)
    ticket_type_id: Optional[UUID] = None

class PurchaseTicketTypeSchema(CamelSchema):
    id: UUID
    name: str
    discount_percentage: float

class PurchaseResponseSchema(CamelSchema):
    id: UUID
    session_id: UUID
    user_email: EmailStr
    user_cpf: Optional[str] = None
    quantity: int
    ticket_type: Optional[PurchaseTicketTypeSchema] = None
    total_price: float
    purchase_date: datetime

class PurchaseMovieSchema(CamelSchema):
    id: UUID
    title: str
    duration: int

class PurchaseSessionSchema(SessionResponseSchema):
    movie: PurchaseMovieSchema
    cinema: CinemaMinimalSchema

class PurchaseDetailSchema(PurchaseResponseSchema):
    session: PurchaseSessionSchema
