"""Kanban card registry.

Stage changes are gated by the stage rule registry; all other card fields are
plain data.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional
from uuid import uuid4

from kanban_engines.board_config.service import BoardConfigService, get_board_config_service
from kanban_engines.cards.models import KanbanCard
from kanban_engines.common.errors import InvalidTransitionError, NotFoundError
from kanban_engines.common.validation import require_text
from kanban_engines.logging.audit import emit_audit_event
from kanban_engines.stage_rules.service import StageRuleService, get_stage_rule_service
from kanban_engines.storage.state import get_card_store
from kanban_engines.storage.store import KeyValueStore

logger = logging.getLogger(__name__)

RESOURCE_KIND = "kanban_card"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _normalize_stage(stage: str) -> str:
    return stage.strip().lower()


class KanbanCardService:
    def __init__(
        self,
        store: Optional[KeyValueStore[KanbanCard]] = None,
        config_service: Optional[BoardConfigService] = None,
        rule_service: Optional[StageRuleService] = None,
        id_fn: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.store = store if store is not None else get_card_store()
        self._config_service = config_service or get_board_config_service()
        self._rule_service = rule_service or get_stage_rule_service()
        self._id_fn = id_fn or (lambda: uuid4().hex)
        self._clock = clock or _utc_now

    def add_card(self, description: str, assignee: str, deadline: datetime) -> KanbanCard:
        require_text(description, "Couldn't add Kanban Card. Description is invalid", RESOURCE_KIND)
        require_text(assignee, "Couldn't add Kanban Card. Assignee does not exist", RESOURCE_KIND)
        card = KanbanCard(
            id=self._id_fn(),
            description=description,
            assignee=assignee,
            deadline=deadline,
            stage=self._config_service.get_configuration().initial_stage,
            created_at=self._clock(),
            updated_at=None,
        )
        self.store.insert(card.id, card)
        logger.info("Added Kanban Card %s in stage %r", card.id, card.stage)
        emit_audit_event("kanban_card:create", RESOURCE_KIND, card.id, metadata={"stage": card.stage})
        return card

    def update_card(self, card_id: str, description: str, assignee: str, deadline: datetime) -> KanbanCard:
        # Only the description is re-validated on update.
        require_text(description, "Couldn't update Kanban Card. Description is invalid", RESOURCE_KIND)
        card = self.store.get(card_id)
        if card is None:
            raise NotFoundError(
                f"Couldn't update Kanban Card with id={card_id}. Kanban Card with id={card_id} not found.",
                resource_kind=RESOURCE_KIND,
            )
        updated = card.model_copy(
            update={
                "description": description,
                "assignee": assignee,
                "deadline": deadline,
                "updated_at": self._clock(),
            }
        )
        self.store.insert(card_id, updated)
        logger.info("Updated Kanban Card %s", card_id)
        emit_audit_event("kanban_card:update", RESOURCE_KIND, card_id)
        return updated

    def delete_card(self, card_id: str) -> KanbanCard:
        removed = self.store.remove(card_id)
        if removed is None:
            raise NotFoundError(
                f"Couldn't delete Kanban Card with id={card_id}. Kanban Card not found.",
                resource_kind=RESOURCE_KIND,
            )
        logger.info("Deleted Kanban Card %s", card_id)
        emit_audit_event("kanban_card:delete", RESOURCE_KIND, card_id)
        return removed

    def update_card_stage(self, card_id: str, stage: str) -> str:
        card = self.store.get(card_id)
        if card is None:
            raise NotFoundError(
                f"Couldn't update Kanban Card with id={card_id}. Kanban Card with id={card_id} not found.",
                resource_kind=RESOURCE_KIND,
            )
        if not self._rule_service.is_transition_allowed(card.stage, stage):
            logger.warning("Denied stage transition for card %s: %r -> %r", card_id, card.stage, stage)
            raise InvalidTransitionError(
                f"Couldn't update Kanban Card with id={card_id}. "
                f"Invalid stage transition from {card.stage} to {stage}.",
                stage_from=card.stage,
                stage_to=stage,
            )
        updated = card.model_copy(update={"stage": stage, "updated_at": self._clock()})
        self.store.insert(card_id, updated)
        logger.info("Moved Kanban Card %s from %r to %r", card_id, card.stage, stage)
        emit_audit_event(
            "kanban_card:stage",
            RESOURCE_KIND,
            card_id,
            metadata={"stage_from": card.stage, "stage_to": stage},
        )
        return stage

    def get_card(self, card_id: str) -> KanbanCard:
        require_text(card_id, f"Invalid id parameter: {card_id}", RESOURCE_KIND)
        card = self.store.get(card_id)
        if card is None:
            raise NotFoundError(
                f"Kanban Card with the provided id={card_id} does not exist.",
                resource_kind=RESOURCE_KIND,
            )
        logger.debug("Fetched Kanban Card %s", card_id)
        return card

    def list_cards(self) -> List[KanbanCard]:
        cards = self.store.values()
        logger.debug("Listed %d Kanban Cards", len(cards))
        return cards

    def list_cards_by_assignee(self, assignee: str) -> List[KanbanCard]:
        require_text(assignee, f"Couldn't get Kanban Cards. Assignee '{assignee}' is invalid.", RESOURCE_KIND)
        return [card for card in self.store.values() if card.assignee == assignee]

    def list_cards_by_stage(self, stage: str) -> List[KanbanCard]:
        require_text(stage, "Couldn't get Kanban Cards. Stage is invalid", RESOURCE_KIND)
        wanted = _normalize_stage(stage)
        cards = [card for card in self.store.values() if _normalize_stage(card.stage) == wanted]
        logger.debug("Found %d Kanban Cards in stage %r", len(cards), stage)
        return cards


_default_service: Optional[KanbanCardService] = None


def get_kanban_card_service() -> KanbanCardService:
    global _default_service
    if _default_service is None:
        _default_service = KanbanCardService()
    return _default_service


def set_kanban_card_service(service: Optional[KanbanCardService]) -> None:
    global _default_service
    _default_service = service
