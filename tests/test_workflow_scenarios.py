"""End-to-end board scenarios over HTTP."""
from fastapi.testclient import TestClient

from kanban_engines.server import create_app
from kanban_engines.storage.state import set_card_store, set_config_store, set_rule_store
from kanban_engines.storage.store import FilesystemKeyValueStore
from kanban_engines.board_config.models import BoardConfiguration
from kanban_engines.cards.models import KanbanCard
from kanban_engines.stage_rules.models import StageTransitionRule
from kanban_engines.board_config.service import set_board_config_service
from kanban_engines.cards.service import set_kanban_card_service
from kanban_engines.stage_rules.service import set_stage_rule_service


def _add_card(client, description="write spec", assignee="alice"):
    resp = client.post("/cards", json={"description": description, "assignee": assignee, "deadline": "2030-01-01T00:00:00Z"})
    assert resp.status_code == 200
    return resp.json()


def test_denylisted_transition_scenario():
    client = TestClient(create_app())
    client.post("/stage-rules", json={"stage_from": "Requested", "stage_to": "Done"})
    card = _add_card(client)

    denied = client.put(f"/cards/{card['id']}/stage", json={"stage": "Done"})
    assert denied.status_code == 409
    error = denied.json()["error"]
    assert error["code"] == "kanban.invalid_transition"
    assert error["message"] == (
        f"Couldn't update Kanban Card with id={card['id']}. Invalid stage transition from Requested to Done."
    )
    assert client.get(f"/cards/{card['id']}").json()["stage"] == "Requested"

    allowed = client.put(f"/cards/{card['id']}/stage", json={"stage": "InProgress"})
    assert allowed.status_code == 200
    assert client.get(f"/cards/{card['id']}").json()["stage"] == "InProgress"


def test_blank_initial_stage_fails_before_and_after_cards():
    client = TestClient(create_app())
    assert client.put("/configuration", json={"initial_stage": ""}).status_code == 400
    _add_card(client)
    resp = client.put("/configuration", json={"initial_stage": ""})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "kanban.validation_error"
    assert client.get("/configuration").json() == {"initial_stage": "Requested"}


def test_board_survives_restart_with_filesystem_store(tmp_path):
    def _boot():
        for setter in (set_stage_rule_service, set_board_config_service, set_kanban_card_service):
            setter(None)
        set_rule_store(FilesystemKeyValueStore("stage_transition_rules", StageTransitionRule, root=str(tmp_path)))
        set_card_store(FilesystemKeyValueStore("kanban_cards", KanbanCard, root=str(tmp_path)))
        set_config_store(FilesystemKeyValueStore("board_config", BoardConfiguration, root=str(tmp_path)))
        return TestClient(create_app())

    client = _boot()
    assert client.put("/configuration", json={"initial_stage": "Backlog"}).status_code == 200
    rule = client.post("/stage-rules", json={"stage_from": "Backlog", "stage_to": "Done"}).json()
    card = _add_card(client)
    assert card["stage"] == "Backlog"

    client = _boot()
    assert client.get("/configuration").json() == {"initial_stage": "Backlog"}
    assert client.get(f"/stage-rules/{rule['id']}").json() == rule
    assert client.get(f"/cards/{card['id']}").json() == card
    assert client.put(f"/cards/{card['id']}/stage", json={"stage": "Done"}).status_code == 409
    assert _add_card(client, description="second")["stage"] == "Backlog"
    assert client.put("/configuration", json={"initial_stage": "Backlog"}).status_code == 409
