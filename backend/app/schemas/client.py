"""Client schemas."""

from typing import Optional

from pydantic import Field, field_validator

from backend.app.schemas.common import CamelModel, UtcDatetime


class ClientForm(CamelModel):
    name: str = Field(min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    company_name: Optional[str] = None
    contact_person: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Name is required")
        return value.strip()


class ClientRead(CamelModel):
    id: int
    owner_id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    company_name: Optional[str] = None
    contact_person: Optional[str] = None
    created_at: UtcDatetime
