from datetime import datetime, timezone

import pytest

from kanban_engines.board_config.models import BoardConfiguration
from kanban_engines.board_config.service import CONFIGURATION_KEY, BoardConfigService
from kanban_engines.cards.service import KanbanCardService
from kanban_engines.common.errors import ConflictError, StateError, ValidationError
from kanban_engines.logging.audit import set_audit_logger
from kanban_engines.stage_rules.service import StageRuleService
from kanban_engines.storage.store import InMemoryKeyValueStore

DEADLINE = datetime(2030, 1, 1, tzinfo=timezone.utc)


def _board():
    card_store = InMemoryKeyValueStore()
    config = BoardConfigService(card_store=card_store, config_store=InMemoryKeyValueStore(), initial_stage="Requested")
    cards = KanbanCardService(
        store=card_store,
        config_service=config,
        rule_service=StageRuleService(store=InMemoryKeyValueStore(), allow_duplicates=False),
    )
    return config, cards


def _fresh_config(**kwargs) -> BoardConfigService:
    return BoardConfigService(card_store=InMemoryKeyValueStore(), config_store=InMemoryKeyValueStore(), **kwargs)


def test_default_initial_stage(monkeypatch):
    monkeypatch.delenv("KANBAN_INITIAL_STAGE", raising=False)
    assert _fresh_config().get_configuration().initial_stage == "Requested"
    monkeypatch.setenv("KANBAN_INITIAL_STAGE", "Backlog")
    assert _fresh_config().get_configuration().initial_stage == "Backlog"


@pytest.mark.parametrize("seed", ["", "   ", None])
def test_blank_seed_falls_back_to_default(monkeypatch, seed):
    monkeypatch.delenv("KANBAN_INITIAL_STAGE", raising=False)
    assert _fresh_config(initial_stage=seed).get_configuration().initial_stage == "Requested"


def test_stored_configuration_wins_over_seed():
    config_store = InMemoryKeyValueStore()
    card_store = InMemoryKeyValueStore()
    BoardConfigService(card_store=card_store, config_store=config_store).set_configuration("Backlog")
    reopened = BoardConfigService(card_store=card_store, config_store=config_store, initial_stage="Requested")
    assert reopened.get_configuration().initial_stage == "Backlog"


def test_set_configuration_while_board_empty():
    config, cards = _board()
    result = config.set_configuration("Backlog")
    assert result.initial_stage == "Backlog"
    assert config.get_configuration().initial_stage == "Backlog"
    assert cards.add_card("write spec", "alice", DEADLINE).stage == "Backlog"


@pytest.mark.parametrize("stage", ["", "   ", "\t\n"])
def test_blank_initial_stage_rejected(stage):
    config, _ = _board()
    with pytest.raises(ValidationError):
        config.set_configuration(stage)
    assert config.get_configuration().initial_stage == "Requested"


def test_configuration_locked_once_cards_exist():
    config, cards = _board()
    card = cards.add_card("write spec", "alice", DEADLINE)
    with pytest.raises(ConflictError):
        config.set_configuration("Backlog")
    with pytest.raises(ValidationError):
        config.set_configuration("")
    assert config.get_configuration().initial_stage == "Requested"

    cards.delete_card(card.id)
    assert config.set_configuration("Backlog").initial_stage == "Backlog"


def test_missing_configuration_is_state_error():
    config, _ = _board()
    config.config_store.remove(CONFIGURATION_KEY)
    with pytest.raises(StateError):
        config.get_configuration()


def test_blank_stored_configuration_is_state_error():
    config, _ = _board()
    config.config_store.insert(CONFIGURATION_KEY, BoardConfiguration(initial_stage="   "))
    with pytest.raises(StateError):
        config.get_configuration()


def test_set_configuration_emits_audit_event():
    events = []
    set_audit_logger(events.append)
    config, _ = _board()
    config.set_configuration("Backlog")
    assert [e.action for e in events] == ["board_config:update"]
    assert events[0].resource_kind == "board_config"
    assert events[0].metadata == {"initial_stage": "Backlog"}
