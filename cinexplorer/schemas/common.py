from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from datetime import datetime, timezone


class CamelSchema(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class MessageSchema(BaseModel):
    message: str


def as_utc_naive(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
