"""Holder for the board configuration (initial stage of new cards)."""
from __future__ import annotations

import logging
from typing import Optional

from kanban_engines.board_config.models import BoardConfiguration
from kanban_engines.cards.models import KanbanCard
from kanban_engines.common.errors import ConflictError, StateError
from kanban_engines.common.validation import is_blank, require_text
from kanban_engines.config import runtime_config
from kanban_engines.logging.audit import emit_audit_event
from kanban_engines.storage.state import get_card_store, get_config_store
from kanban_engines.storage.store import KeyValueStore

logger = logging.getLogger(__name__)

RESOURCE_KIND = "board_config"
CONFIGURATION_KEY = "configuration"


class BoardConfigService:
    """Owns the single BoardConfiguration record.

    The record lives in the configuration store under ``CONFIGURATION_KEY``
    and is seeded only when absent, so a restart keeps the stage every stored
    card was created under. It may only be replaced while the card store is
    empty.
    """

    def __init__(
        self,
        card_store: Optional[KeyValueStore[KanbanCard]] = None,
        config_store: Optional[KeyValueStore[BoardConfiguration]] = None,
        initial_stage: Optional[str] = None,
    ) -> None:
        self.card_store = card_store if card_store is not None else get_card_store()
        self.config_store = config_store if config_store is not None else get_config_store()
        if self.config_store.get(CONFIGURATION_KEY) is None:
            seed = runtime_config.get_initial_stage() if is_blank(initial_stage) else initial_stage
            self.config_store.insert(CONFIGURATION_KEY, BoardConfiguration(initial_stage=seed))
            logger.info("Seeded board initial stage %r", seed)

    def set_configuration(self, initial_stage: str) -> BoardConfiguration:
        require_text(
            initial_stage,
            "Couldn't update Configuration. InitialStage can't be empty.",
            resource_kind=RESOURCE_KIND,
        )
        if self.card_store.count() > 0:
            logger.warning("Rejected configuration change: board already has cards")
            raise ConflictError(
                "Couldn't update Configuration. There is at least one Kanban Card.",
                resource_kind=RESOURCE_KIND,
            )
        configuration = BoardConfiguration(initial_stage=initial_stage)
        self.config_store.insert(CONFIGURATION_KEY, configuration)
        logger.info("Board initial stage set to %r", initial_stage)
        emit_audit_event("board_config:update", RESOURCE_KIND, metadata={"initial_stage": initial_stage})
        return configuration

    def get_configuration(self) -> BoardConfiguration:
        configuration = self.config_store.get(CONFIGURATION_KEY)
        if configuration is None or is_blank(configuration.initial_stage):
            raise StateError("Invalid configuration object", resource_kind=RESOURCE_KIND)
        return configuration


_default_service: Optional[BoardConfigService] = None


def get_board_config_service() -> BoardConfigService:
    global _default_service
    if _default_service is None:
        _default_service = BoardConfigService()
    return _default_service


def set_board_config_service(service: Optional[BoardConfigService]) -> None:
    global _default_service
    _default_service = service
