# schoolhub/services/audit.py
from __future__ import annotations
from typing import Any, Optional

from fastapi import Request
from sqlalchemy.orm import Session

from schoolhub.core.context import RequestContext
from schoolhub.models.audit import AuditLog

def audit_log(
    db: Session,
    ctx: RequestContext,
    *,
    action: str,
    payload: Optional[dict[str, Any]] = None,
    request: Optional[Request] = None,
) -> None:
    ip = request.client.host if (request and request.client) else None
    ua = request.headers.get("user-agent") if request else None
    db.add(AuditLog(
        school_id=ctx.school_id, user_id=ctx.user_id,
        action=action, payload=payload, ip=ip, user_agent=ua,
    ))
    # No commit here: the endpoint commits with the rest of its work.
