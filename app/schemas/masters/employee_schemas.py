# app/schemas/masters/employee_schemas.py

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List
from datetime import datetime

from app.schemas.masters.company_schemas import PHONE_PATTERN


class EmployeeIn(BaseModel):
    employee_firstname: str = Field(min_length=1, max_length=50)
    employee_lastname: str = Field(min_length=1, max_length=50)
    employee_mobile: str = Field(max_length=30, pattern=PHONE_PATTERN)
    employee_email: EmailStr
    employee_position: str = Field(min_length=1, max_length=100)
    position: str = Field(min_length=1, max_length=100)
    company_id: str = Field(min_length=1)

    @field_validator("employee_email")
    @classmethod
    def _email_length(cls, v):
        if len(v) > 100:
            raise ValueError("Must be max 100 chars")
        return v

    def full_name(self) -> str:
        return f"{self.employee_firstname} {self.employee_lastname}".strip()


class EmployeeOut(BaseModel):
    id: str
    name: str
    first_name: str
    last_name: str
    mobile: str
    email: str
    employee_position: str
    position: str
    company_id: str
    company_name: Optional[str]

    created_at: datetime
    updated_at: Optional[datetime]


class EmployeeListData(BaseModel):
    total: int
    items: List[EmployeeOut]
