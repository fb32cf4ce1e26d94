"""User-visible notice models (transient toast messages)."""

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class NoticeLevel(StrEnum):
    """Visual variant of a notice."""

    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class Notice(BaseModel):
    """A transient message shown to the user."""

    model_config = ConfigDict(frozen=True)

    level: NoticeLevel
    message: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
