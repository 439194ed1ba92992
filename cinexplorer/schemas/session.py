from pydantic import Field, field_validator
from typing import Optional
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from cinexplorer.schemas.common import CamelSchema, as_utc_naive
from cinexplorer.schemas.cinema import CinemaMinimalSchema


class SessionCreateSchema(CamelSchema):
    cinema_id: UUID
    movie_id: UUID
    date_time: datetime
    room_type: str = Field(..., min_length=1, max_length=50)
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)

    @field_validator("date_time")
    @classmethod
    def normalize_date_time(cls, v):
        return as_utc_naive(v)

class SessionUpdateSchema(CamelSchema):
    date_time: Optional[datetime] = None
    room_type: Optional[str] = Field(default=None, min_length=1, max_length=50)
    price: Optional[Decimal] = Field(default=None, gt=0, max_digits=10, decimal_places=2)

    @field_validator("date_time")
    @classmethod
    def normalize_date_time(cls, v):
        return as_utc_naive(v)

class SessionResponseSchema(CamelSchema):
    id: UUID
    date_time: datetime
    room_type: str
    price: float

class SessionCinemaSchema(CinemaMinimalSchema):
    state: str

class SessionMovieSchema(CamelSchema):
    id: UUID
    title: str
    genre: str
    duration: int
    rating: str
    image_url: Optional[str] = None

class SessionListItemSchema(SessionResponseSchema):
    cinema: SessionCinemaSchema
    movie: SessionMovieSchema

class SessionDetailSchema(SessionListItemSchema):
    available_seats: int

class SessionAvailabilitySchema(CamelSchema):
    session_id: UUID
    capacity: int
    available_seats: int
