from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field


def _now() -> datetime:
    return datetime.now(timezone.utc)


class KanbanCard(BaseModel):
    id: str = Field(default_factory=lambda: uuid4().hex)
    description: str
    assignee: str
    deadline: datetime
    stage: str
    created_at: datetime = Field(default_factory=_now)
    updated_at: Optional[datetime] = None


class KanbanCardPayload(BaseModel):
    """Mutable card fields. Stage changes go through update_card_stage."""

    description: str
    assignee: str
    deadline: datetime


class KanbanCardStageUpdate(BaseModel):
    stage: str


class KanbanCardStageResult(BaseModel):
    id: str
    stage: str
