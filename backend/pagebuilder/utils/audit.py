from flask import g, has_request_context
from pagebuilder.extensions import db
from pagebuilder.models.audit_log import AuditLog
from typing import Optional

def log_action(
    *,
    action: str,
    entity_type: str,
    entity_id: Optional[str],
    payload: dict | None = None
):
    """Queue an AuditLog row on the current session; the caller's transaction commits it."""
    log = AuditLog()

    actor = getattr(g, "current_user", None) if has_request_context() else None
    log.actor_id = actor.id if actor is not None else None
    log.action = action
    log.entity_type = entity_type
    log.entity_id = entity_id or "*"
    log.payload = payload or {}

    db.session.add(log)
    return log
