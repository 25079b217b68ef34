"""Registry of disallowed stage transitions."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional
from uuid import uuid4

from kanban_engines.common.errors import ConflictError, NotFoundError, ValidationError
from kanban_engines.common.validation import is_blank
from kanban_engines.config import runtime_config
from kanban_engines.logging.audit import emit_audit_event
from kanban_engines.stage_rules.models import StageTransitionRule
from kanban_engines.stage_rules.validator import is_transition_allowed
from kanban_engines.storage.state import get_rule_store
from kanban_engines.storage.store import KeyValueStore

logger = logging.getLogger(__name__)

RESOURCE_KIND = "stage_rule"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class StageRuleService:
    def __init__(
        self,
        store: Optional[KeyValueStore[StageTransitionRule]] = None,
        id_fn: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], datetime]] = None,
        allow_duplicates: Optional[bool] = None,
    ) -> None:
        self.store = store if store is not None else get_rule_store()
        self._id_fn = id_fn or (lambda: uuid4().hex)
        self._clock = clock or _utc_now
        if allow_duplicates is None:
            allow_duplicates = runtime_config.allow_duplicate_rules()
        self._allow_duplicates = allow_duplicates

    def add_rule(self, stage_from: str, stage_to: str) -> StageTransitionRule:
        self._validate_pair(stage_from, stage_to, "Invalid payload: missing stage_from or stage_to")
        self._ensure_unique(stage_from, stage_to)
        rule = StageTransitionRule(
            id=self._id_fn(),
            stage_from=stage_from,
            stage_to=stage_to,
            created_at=self._clock(),
            updated_at=None,
        )
        self.store.insert(rule.id, rule)
        logger.info("Added disallowed stage transition %s -> %s (id=%s)", stage_from, stage_to, rule.id)
        emit_audit_event(
            "stage_rule:create",
            RESOURCE_KIND,
            rule.id,
            metadata={"stage_from": stage_from, "stage_to": stage_to},
        )
        return rule

    def update_rule(self, rule_id: str, stage_from: str, stage_to: str) -> StageTransitionRule:
        self._validate_pair(
            stage_from,
            stage_to,
            "Invalid payload. Both stage_from and stage_to fields are required.",
        )
        rule = self.store.get(rule_id)
        if rule is None:
            raise NotFoundError(
                f"Couldn't update Stage transition with id={rule_id}. "
                f"Stage transition with id={rule_id} not found.",
                resource_kind=RESOURCE_KIND,
            )
        self._ensure_unique(stage_from, stage_to, ignore_id=rule_id)
        updated = rule.model_copy(
            update={"stage_from": stage_from, "stage_to": stage_to, "updated_at": self._clock()}
        )
        self.store.insert(rule_id, updated)
        logger.info("Updated stage transition %s to %s -> %s", rule_id, stage_from, stage_to)
        emit_audit_event(
            "stage_rule:update",
            RESOURCE_KIND,
            rule_id,
            metadata={"stage_from": stage_from, "stage_to": stage_to},
        )
        return updated

    def delete_rule(self, rule_id: str) -> StageTransitionRule:
        removed = self.store.remove(rule_id)
        if removed is None:
            raise NotFoundError(
                f"Couldn't delete Stage transition with id={rule_id}. "
                f"Stage transition with id={rule_id} not found.",
                resource_kind=RESOURCE_KIND,
            )
        logger.info("Deleted stage transition %s", rule_id)
        emit_audit_event("stage_rule:delete", RESOURCE_KIND, rule_id)
        return removed

    def get_rule(self, rule_id: str) -> StageTransitionRule:
        rule = self.store.get(rule_id)
        if rule is None:
            raise NotFoundError(f"Couldn't find Stage transition with id={rule_id}", resource_kind=RESOURCE_KIND)
        logger.debug("Fetched stage transition %s", rule_id)
        return rule

    def list_rules(self) -> List[StageTransitionRule]:
        rules = self.store.values()
        logger.debug("Listed %d stage transitions", len(rules))
        return rules

    def is_transition_allowed(self, stage_from: str, stage_to: str) -> bool:
        allowed = is_transition_allowed(self.store.values(), stage_from, stage_to)
        logger.debug("Transition %r -> %r allowed=%s", stage_from, stage_to, allowed)
        return allowed

    # --- Internal helpers ---
    @staticmethod
    def _validate_pair(stage_from: str, stage_to: str, message: str) -> None:
        if is_blank(stage_from) or is_blank(stage_to):
            raise ValidationError(message, resource_kind=RESOURCE_KIND)

    def _ensure_unique(self, stage_from: str, stage_to: str, ignore_id: Optional[str] = None) -> None:
        if self._allow_duplicates:
            return
        for rule in self.store.values():
            if rule.id == ignore_id:
                continue
            if rule.stage_from == stage_from and rule.stage_to == stage_to:
                raise ConflictError(
                    "Stage transition already exists",
                    resource_kind=RESOURCE_KIND,
                    details={"existing_id": rule.id},
                )


_default_service: Optional[StageRuleService] = None


def get_stage_rule_service() -> StageRuleService:
    global _default_service
    if _default_service is None:
        _default_service = StageRuleService()
    return _default_service


def set_stage_rule_service(service: Optional[StageRuleService]) -> None:
    global _default_service
    _default_service = service
