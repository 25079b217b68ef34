from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter

from kanban_engines.cards.models import KanbanCard, KanbanCardPayload, KanbanCardStageResult, KanbanCardStageUpdate
from kanban_engines.cards.service import get_kanban_card_service

router = APIRouter(prefix="/cards", tags=["kanban_cards"])


@router.post("", response_model=KanbanCard)
def add_card(payload: KanbanCardPayload):
    return get_kanban_card_service().add_card(payload.description, payload.assignee, payload.deadline)


@router.get("", response_model=List[KanbanCard])
def list_cards(assignee: Optional[str] = None, stage: Optional[str] = None):
    svc = get_kanban_card_service()
    if assignee is not None:
        cards = svc.list_cards_by_assignee(assignee)
        if stage is not None:
            wanted = {card.id for card in svc.list_cards_by_stage(stage)}
            cards = [card for card in cards if card.id in wanted]
        return cards
    if stage is not None:
        return svc.list_cards_by_stage(stage)
    return svc.list_cards()


@router.get("/{card_id}", response_model=KanbanCard)
def get_card(card_id: str):
    return get_kanban_card_service().get_card(card_id)


@router.put("/{card_id}", response_model=KanbanCard)
def update_card(card_id: str, payload: KanbanCardPayload):
    return get_kanban_card_service().update_card(card_id, payload.description, payload.assignee, payload.deadline)


@router.put("/{card_id}/stage", response_model=KanbanCardStageResult)
def update_card_stage(card_id: str, payload: KanbanCardStageUpdate):
    stage = get_kanban_card_service().update_card_stage(card_id, payload.stage)
    return KanbanCardStageResult(id=card_id, stage=stage)


@router.delete("/{card_id}", response_model=KanbanCard)
def delete_card(card_id: str):
    return get_kanban_card_service().delete_card(card_id)
