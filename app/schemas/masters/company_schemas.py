# app/schemas/masters/company_schemas.py

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List
from datetime import datetime

from app.models.enums.company_type import CompanyType

PHONE_PATTERN = r"^[\+]?[0-9\s\-\(\)]+$"


class CompanyIn(BaseModel):
    name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    phone: str = Field(min_length=10, max_length=20, pattern=PHONE_PATTERN)
    add1: str = Field(min_length=2, max_length=100)
    add2: Optional[str] = Field(default=None, max_length=100)
    city: str = Field(min_length=2, max_length=100)
    post_code: str = Field(min_length=2, max_length=20)
    country: str = Field(min_length=2, max_length=100)
    type: CompanyType = CompanyType.client

    @field_validator("email")
    @classmethod
    def _email_length(cls, v):
        if len(v) > 100:
            raise ValueError("Must be max 100 chars")
        return v

    def display_address(self) -> str:
        parts = [self.add1, self.add2, self.city, self.post_code]
        return ", ".join(p.strip() for p in parts if p and p.strip())


class CompanyOut(BaseModel):
    id: str
    name: str
    email: str
    phone: str
    address: str
    country: str
    type: CompanyType

    created_at: datetime
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True


class CompanyListData(BaseModel):
    total: int
    items: List[CompanyOut]
