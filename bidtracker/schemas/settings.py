"""Tenant mail settings schemas."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TenantSettingsUpdate(BaseModel):
    """
    Upsert payload.

    A blank ``smtp_password`` keeps the stored secret.
    """

    smtp_host: Optional[str] = None
    smtp_port: Optional[int] = Field(default=None, ge=1, le=65535)
    smtp_user: Optional[str] = None
    smtp_password: Optional[str] = None
    sender_name: Optional[str] = None
    reminder_subject: Optional[str] = None
    reminder_body: Optional[str] = None
    summary_subject: Optional[str] = None
    summary_body: Optional[str] = None


class TenantSettingsResponse(BaseModel):
    """Settings as returned to the consultant; the secret never leaves."""

    smtp_host: Optional[str] = None
    smtp_port: Optional[int] = None
    smtp_user: Optional[str] = None
    has_smtp_password: bool = False
    sender_name: Optional[str] = None
    reminder_subject: Optional[str] = None
    reminder_body: Optional[str] = None
    summary_subject: Optional[str] = None
    summary_body: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_model(cls, row) -> "TenantSettingsResponse":
        response = cls.model_validate(row)
        response.has_smtp_password = bool(row.smtp_password)
        return response
