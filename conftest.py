import os
import sys
from pathlib import Path

import pytest

# Ensure repo root on sys.path for imports from anywhere in tests tree.
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("KANBAN_STORE_BACKEND", "memory")

from kanban_engines.board_config.service import set_board_config_service
from kanban_engines.cards.service import set_kanban_card_service
from kanban_engines.logging.audit import set_audit_logger
from kanban_engines.stage_rules.service import set_stage_rule_service
from kanban_engines.storage.state import set_card_store, set_config_store, set_rule_store


@pytest.fixture(autouse=True)
def _fresh_board():
    """Every test starts with empty stores and freshly built services."""
    for setter in (set_rule_store, set_card_store, set_config_store, set_stage_rule_service, set_board_config_service, set_kanban_card_service):
        setter(None)
    set_audit_logger(None)
    yield
    set_audit_logger(None)
