from pydantic import EmailStr, Field
from datetime import datetime
from uuid import UUID

from cinexplorer.schemas.common import CamelSchema


class AdminCreateSchema(CamelSchema):
    name: str = Field(..., min_length=3, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6)

class AdminResponseSchema(CamelSchema):
    id: UUID
    name: str
    email: EmailStr

class AdminListItemSchema(AdminResponseSchema):
    created_at: datetime
