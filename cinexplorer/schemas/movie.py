from pydantic import Field, HttpUrl
from typing import Optional, List
from datetime import datetime
from uuid import UUID

from cinexplorer.schemas.common import CamelSchema
from cinexplorer.schemas.cinema import CinemaMinimalSchema


class MovieBaseSchema(CamelSchema):
    title: str = Field(..., min_length=3, max_length=255)
    genre: str = Field(..., min_length=3, max_length=100)
    duration: int = Field(..., gt=0)
    rating: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = Field(default=None, max_length=5000)
    image_url: Optional[str] = None

class MovieCreateSchema(MovieBaseSchema):
    image_url: Optional[HttpUrl] = None

class MovieUpdateSchema(CamelSchema):
    title: Optional[str] = Field(default=None, min_length=3, max_length=255)
    genre: Optional[str] = Field(default=None, min_length=3, max_length=100)
    duration: Optional[int] = Field(default=None, gt=0)
    rating: Optional[str] = Field(default=None, min_length=1, max_length=50)
    description: Optional[str] = Field(default=None, max_length=5000)
    image_url: Optional[HttpUrl] = None

class MovieResponseSchema(MovieBaseSchema):
    id: UUID

class MovieSessionSchema(CamelSchema):
    id: UUID
    date_time: datetime
    room_type: str
    price: float
    cinema: CinemaMinimalSchema

class MovieDetailSchema(MovieResponseSchema):
    sessions: List[MovieSessionSchema] = []
