"""
Temporary storage for bulk import previews.

A preview lives in process memory between the preview call and the confirm
call, and expires after settings.import_preview_ttl_minutes. Single-server
only.
"""
import uuid
from datetime import datetime, timedelta
from typing import Any, Optional

import structlog

from config import settings

logger = structlog.get_logger(__name__)

# preview_id -> (expires_at, kind, payload)
_cache: dict[str, tuple[datetime, str, Any]] = {}


def store_preview(kind: str, payload: Any, ttl_minutes: Optional[int] = None) -> str:
    """
    Store an import preview and return its preview_id.

    Args:
        kind: Import type ("trips", "vehicles"); confirm must ask for the same kind
        payload: Whatever confirm needs to commit the batch
        ttl_minutes: Override for settings.import_preview_ttl_minutes
    """
    _cleanup_expired()

    ttl = ttl_minutes if ttl_minutes is not None else settings.import_preview_ttl_minutes
    preview_id = str(uuid.uuid4())
    _cache[preview_id] = (datetime.now() + timedelta(minutes=ttl), kind, payload)

    logger.debug("preview_stored", preview_id=preview_id, kind=kind, ttl_minutes=ttl)
    return preview_id


def retrieve_preview(kind: str, preview_id: str) -> Optional[Any]:
    """Return the stored payload, or None if expired, unknown, or of another kind."""
    entry = _cache.get(preview_id)
    if entry is None:
        return None

    expires_at, stored_kind, payload = entry
    if datetime.now() > expires_at:
        del _cache[preview_id]
        logger.info("preview_expired", preview_id=preview_id, kind=stored_kind)
        return None

    if stored_kind != kind:
        return None

    return payload


def delete_preview(preview_id: str) -> None:
    """Remove preview after confirm or cancel."""
    _cache.pop(preview_id, None)


def _cleanup_expired() -> None:
    """Remove all expired entries."""
    now = datetime.now()
    expired = [k for k, (exp, _, _) in _cache.items() if now > exp]
    for k in expired:
        del _cache[k]
