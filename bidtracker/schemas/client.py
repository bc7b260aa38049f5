"""Client-related Pydantic schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class ClientBase(BaseModel):
    """Base client schema."""

    name: str = Field(min_length=1, max_length=255)
    company: str = Field(min_length=1, max_length=500)
    email: Optional[EmailStr] = None
    contract_value: Optional[Decimal] = Field(default=None, ge=0)
    commission_rate: Decimal = Field(default=Decimal("0"), ge=0, le=100)


class ClientCreate(ClientBase):
    """Schema for creating a client."""

    is_active: bool = True
    auth_user_id: Optional[str] = None


class ClientUpdate(BaseModel):
    """Schema for updating a client."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    company: Optional[str] = Field(default=None, min_length=1, max_length=500)
    email: Optional[EmailStr] = None
    contract_value: Optional[Decimal] = Field(default=None, ge=0)
    commission_rate: Optional[Decimal] = Field(default=None, ge=0, le=100)
    is_active: Optional[bool] = None
    auth_user_id: Optional[str] = None


class ClientResponse(ClientBase):
    """Client response schema."""

    id: int
    is_active: bool
    access_token: Optional[str] = None
    auth_user_id: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PortalClient(BaseModel):
    """What the client portal shows about the client itself."""

    name: str
    company: str

    model_config = ConfigDict(from_attributes=True)
