"""Liveness and readiness probes."""
from fastapi import APIRouter
from pydantic import BaseModel

router = APIRouter(tags=["system"])

class HealthStatus(BaseModel):
    status: str
    version: str = "0.1.0"
    
@router.get("/health", response_model=HealthStatus)
def health_check():
    return HealthStatus(status="ok")

@router.get("/ready", response_model=HealthStatus)
def readiness_check():
    from kanban_engines.board_config.service import get_board_config_service

    get_board_config_service().get_configuration()
    return HealthStatus(status="ok")
