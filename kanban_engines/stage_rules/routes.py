from __future__ import annotations

from typing import List

from fastapi import APIRouter

from kanban_engines.stage_rules.models import StageTransitionRule, StageTransitionRulePayload
from kanban_engines.stage_rules.service import get_stage_rule_service

router = APIRouter(prefix="/stage-rules", tags=["stage_rules"])


@router.post("", response_model=StageTransitionRule)
def add_rule(payload: StageTransitionRulePayload):
    return get_stage_rule_service().add_rule(payload.stage_from, payload.stage_to)


@router.get("", response_model=List[StageTransitionRule])
def list_rules():
    return get_stage_rule_service().list_rules()


@router.get("/{rule_id}", response_model=StageTransitionRule)
def get_rule(rule_id: str):
    return get_stage_rule_service().get_rule(rule_id)


@router.put("/{rule_id}", response_model=StageTransitionRule)
def update_rule(rule_id: str, payload: StageTransitionRulePayload):
    return get_stage_rule_service().update_rule(rule_id, payload.stage_from, payload.stage_to)


@router.delete("/{rule_id}", response_model=StageTransitionRule)
def delete_rule(rule_id: str):
    return get_stage_rule_service().delete_rule(rule_id)
