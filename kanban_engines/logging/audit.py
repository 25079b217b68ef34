"""Audit helper for recording mutations of rules, cards and configuration."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    action: str
    resource_kind: str
    resource_id: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=_now)


def _log_audit_event(event: AuditEvent) -> None:
    logger.info(
        "audit action=%s resource=%s id=%s metadata=%s",
        event.action,
        event.resource_kind,
        event.resource_id,
        event.metadata,
    )


_audit_logger: Callable[[AuditEvent], None] = _log_audit_event


def set_audit_logger(sink: Optional[Callable[[AuditEvent], None]]) -> None:
    """Replace the audit sink; ``None`` restores the logging sink."""
    global _audit_logger
    _audit_logger = sink or _log_audit_event


def emit_audit_event(
    action: str,
    resource_kind: str,
    resource_id: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> AuditEvent:
    event = AuditEvent(
        action=action,
        resource_kind=resource_kind,
        resource_id=resource_id,
        metadata=metadata or {},
    )
    _audit_logger(event)
    return event
