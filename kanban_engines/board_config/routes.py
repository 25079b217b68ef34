from __future__ import annotations

from fastapi import APIRouter

from kanban_engines.board_config.models import BoardConfiguration, BoardConfigurationUpdate
from kanban_engines.board_config.service import get_board_config_service

router = APIRouter(prefix="/configuration", tags=["board_config"])


@router.put("", response_model=BoardConfiguration)
def set_configuration(payload: BoardConfigurationUpdate):
    return get_board_config_service().set_configuration(payload.initial_stage)


@router.get("", response_model=BoardConfiguration)
def get_configuration():
    return get_board_config_service().get_configuration()
