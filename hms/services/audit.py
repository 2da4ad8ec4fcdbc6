from typing import Any, Dict, Optional

from hms.models import AuditEvent


def log_action(*, actor, action: str, object_type: Optional[str] = None, object_id=None,
               detail: Optional[Dict[str, Any]] = None) -> AuditEvent:
    """Record an audit event.  ``actor`` is an Identity, a User or None."""
    user_id = getattr(actor, 'user_id', None) or getattr(actor, 'pk', None)
    return AuditEvent.objects.create(
        user_id=user_id,
        action=action,
        object_type=object_type,
        object_id=str(object_id) if object_id is not None else None,
        detail=detail or {},
    )
