from pydantic import Field
from typing import Optional
from decimal import Decimal
from uuid import UUID

from cinexplorer.schemas.common import CamelSchema


class TicketTypeCreateSchema(CamelSchema):
    name: str = Field(..., min_length=3, max_length=100)
    description: str = Field(..., min_length=10, max_length=1000)
    discount_percentage: Decimal = Field(..., ge=0, le=100, decimal_places=2)
    requires_proof: bool

class TicketTypeUpdateSchema(CamelSchema):
    name: Optional[str] = Field(default=None, min_length=3, max_length=100)
    description: Optional[str] = Field(default=None, min_length=10, max_length=1000)
    discount_percentage: Optional[Decimal] = Field(default=None, ge=0, le=100, decimal_places=2)
    requires_proof: Optional[bool] = None

class TicketTypeResponseSchema(CamelSchema):
    id: UUID
    name: str
    description: str
    discount_percentage: float
    requires_proof: bool
