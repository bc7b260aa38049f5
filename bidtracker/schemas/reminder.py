"""Reminder run report schemas (camelCase on the wire)."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ReminderResultResponse(BaseModel):
    bid_id: int
    outcome: str
    detail: Optional[str] = None

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class ReminderRunResponse(BaseModel):
    """Returned by the cron-invoked reminder endpoint."""

    target_date: date
    found: int
    results: list[ReminderResultResponse]

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)
