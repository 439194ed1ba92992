from pydantic import Field, field_validator, model_validator
from typing import Optional
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from cinexplorer.schemas.common import CamelSchema, as_utc_naive


class PromotionCreateSchema(CamelSchema):
    name: str = Field(..., min_length=3, max_length=255)
    description: str = Field(..., min_length=10, max_length=2000)
    discount_percentage: Decimal = Field(..., ge=0, le=100, decimal_places=2)
    start_date: datetime
    end_date: datetime
    is_active: bool = True
    cinema_id: Optional[UUID] = None
    movie_id: Optional[UUID] = None

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_dates(cls, v):
        return as_utc_naive(v)

    @model_validator(mode="after")
    def check_window(self):
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self

class PromotionUpdateSchema(CamelSchema):
    name: Optional[str] = Field(default=None, min_length=3, max_length=255)
    description: Optional[str] = Field(default=None, min_length=10, max_length=2000)
    discount_percentage: Optional[Decimal] = Field(default=None, ge=0, le=100, decimal_places=2)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    is_active: Optional[bool] = None

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_dates(cls, v):
        return as_utc_naive(v)

class PromotionCinemaSchema(CamelSchema):
    id: UUID
    name: str

class PromotionMovieSchema(CamelSchema):
    id: UUID
    title: str

class PromotionResponseSchema(CamelSchema):
    id: UUID
    name: str
    description: str
    discount_percentage: float
    start_date: datetime
    end_date: datetime
    is_active: bool
    cinema: Optional[PromotionCinemaSchema] = None
    movie: Optional[PromotionMovieSchema] = None
