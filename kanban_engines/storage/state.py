"""Shared rule, card and board configuration store singletons for services."""
from __future__ import annotations

from typing import Optional

from kanban_engines.board_config.models import BoardConfiguration
from kanban_engines.cards.models import KanbanCard
from kanban_engines.stage_rules.models import StageTransitionRule
from kanban_engines.storage.store import KeyValueStore, store_from_env

RULE_STORE_NAME = "stage_transition_rules"
CARD_STORE_NAME = "kanban_cards"
CONFIG_STORE_NAME = "board_config"

_rule_store: Optional[KeyValueStore[StageTransitionRule]] = None
_card_store: Optional[KeyValueStore[KanbanCard]] = None
_config_store: Optional[KeyValueStore[BoardConfiguration]] = None


def get_rule_store() -> KeyValueStore[StageTransitionRule]:
    global _rule_store
    if _rule_store is None:
        _rule_store = store_from_env(RULE_STORE_NAME, StageTransitionRule)
    return _rule_store


def set_rule_store(store: Optional[KeyValueStore[StageTransitionRule]]) -> None:
    global _rule_store
    _rule_store = store


def get_card_store() -> KeyValueStore[KanbanCard]:
    global _card_store
    if _card_store is None:
        _card_store = store_from_env(CARD_STORE_NAME, KanbanCard)
    return _card_store


def set_card_store(store: Optional[KeyValueStore[KanbanCard]]) -> None:
    global _card_store
    _card_store = store


def get_config_store() -> KeyValueStore[BoardConfiguration]:
    global _config_store
    if _config_store is None:
        _config_store = store_from_env(CONFIG_STORE_NAME, BoardConfiguration)
    return _config_store


def set_config_store(store: Optional[KeyValueStore[BoardConfiguration]]) -> None:
    global _config_store
    _config_store = store
