from pydantic import Field
from typing import Optional, List
from datetime import datetime
from uuid import UUID

from cinexplorer.schemas.common import CamelSchema


class CinemaBaseSchema(CamelSchema):
    name: str = Field(..., min_length=3, max_length=255)
    address: str = Field(..., min_length=5, max_length=255)
    city: str = Field(..., min_length=3, max_length=100)
    state: str = Field(..., min_length=2, max_length=2)
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)

class CinemaCreateSchema(CinemaBaseSchema):
    pass

class CinemaUpdateSchema(CamelSchema):
    name: Optional[str] = Field(default=None, min_length=3, max_length=255)
    address: Optional[str] = Field(default=None, min_length=5, max_length=255)
    city: Optional[str] = Field(default=None, min_length=3, max_length=100)
    state: Optional[str] = Field(default=None, min_length=2, max_length=2)
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)

class CinemaResponseSchema(CinemaBaseSchema):
    id: UUID
    distance: Optional[float] = None

class CinemaMinimalSchema(CamelSchema):
    id: UUID
    name: str
    address: str
    city: str

class CinemaSessionMovieSchema(CamelSchema):
    id: UUID
    title: str
    genre: str
    duration: int
    rating: str
    image_url: Optional[str] = None

class CinemaSessionSchema(CamelSchema):
    id: UUID
    date_time: datetime
    room_type: str
    price: float
    movie: CinemaSessionMovieSchema

class CinemaDetailSchema(CinemaBaseSchema):
    id: UUID
    sessions: List[CinemaSessionSchema] = []
