from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from uuid import UUID


class Token(BaseModel):
    access_token: str
    token_type: str

class LoginToken(BaseModel):
    token: str

class TokenData(BaseModel):
    admin_id: Optional[UUID] = None

class AdminLoginSchema(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
