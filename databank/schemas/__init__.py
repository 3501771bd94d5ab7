# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Pydantic request/response schemas."""
import re
from datetime import datetime
from typing import List

from pydantic import BaseModel, Field, field_validator

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
PHONE_PATTERN = re.compile(r"^\+?[0-9. ()-]{7,25}$")

MISSING_RECORD_MESSAGE = "This record no longer exists; refresh the list."
OUT_OF_DATE_MESSAGE = "Someone else changed this record; refresh and re-apply your edits."


class PhysicianCreate(BaseModel):
    last_name: str = Field(..., min_length=1, max_length=50)
    first_name: str = Field(..., min_length=1, max_length=50)
    email: str = Field(..., max_length=100)
    phone: str
    specialty: str = Field(..., min_length=1, max_length=100)

    @field_validator("last_name", "first_name", "specialty")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        v = v.strip()
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email format")
        return v

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: str) -> str:
        v = v.strip()
        if not PHONE_PATTERN.match(v):
            raise ValueError("Invalid phone number format")
        return v


class PhysicianUpdate(PhysicianCreate):
    """Full replacement of the editable fields, tagged with the version the caller last read."""
    version: int = Field(..., ge=1)


class PhysicianOut(BaseModel):
    id: int
    last_name: str
    first_name: str
    email: str
    phone: str
    specialty: str
    created: datetime
    updated: datetime
    version: int


class PhysicianList(BaseModel):
    total: int
    physicians: List[PhysicianOut]


class SpecialtyList(BaseModel):
    total: int
    specialties: List[str]


class ErrorResponse(BaseModel):
    error: str
    detail: str = ""
