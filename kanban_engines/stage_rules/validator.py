"""Single-step stage transition gate.

Denylist model: a transition is allowed unless a registered rule names
exactly the same (stage_from, stage_to) pair. Matching is case-sensitive and
untrimmed, unlike the card listing filter by stage.
"""
from __future__ import annotations

from typing import Iterable

from kanban_engines.stage_rules.models import StageTransitionRule


def is_transition_allowed(rules: Iterable[StageTransitionRule], stage_from: str, stage_to: str) -> bool:
    for rule in rules:
        if rule.stage_from == stage_from and rule.stage_to == stage_to:
            return False
    return True
