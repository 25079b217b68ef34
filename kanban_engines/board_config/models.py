from __future__ import annotations

from pydantic import BaseModel


class BoardConfiguration(BaseModel):
    """Board-wide settings; ``initial_stage`` is assigned to every new card."""

    initial_stage: str


class BoardConfigurationUpdate(BaseModel):
    initial_stage: str
