from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field


def _now() -> datetime:
    return datetime.now(timezone.utc)


class StageTransitionRule(BaseModel):
    """A disallowed (stage_from -> stage_to) pair.

    Identity is ``id``; the pair itself is matched by exact value.
    """

    id: str = Field(default_factory=lambda: uuid4().hex)
    stage_from: str
    stage_to: str
    created_at: datetime = Field(default_factory=_now)
    updated_at: Optional[datetime] = None


class StageTransitionRulePayload(BaseModel):
    stage_from: str
    stage_to: str
