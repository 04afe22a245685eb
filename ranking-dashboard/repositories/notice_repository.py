"""
Notice repository (persistence).

The notice table holds a single row keyed by `slot = "config"`.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from domain.notice import Notice, new_notice_id
from repositories.client import get_supabase, raise_for_error

_NOTICE_TABLE: str = "notice"
_NOTICE_SLOT: str = "config"


def get_notice() -> Optional[Notice]:
    """
    Retrieve the broadcast notice.

    Returns:
        Notice or None if it was never saved
    """

    response = (
        get_supabase()
        .table(_NOTICE_TABLE)
        .select("*")
        .eq("slot", _NOTICE_SLOT)
        .limit(1)
        .execute()
    )
    raise_for_error(response, "fetch notice")

    rows = getattr(response, "data", None) or []
    if not rows:
        return None

    row = rows[0]
    return Notice(
        notice_id=str(row["notice_id"]),
        html_content=str(row.get("html_content") or ""),
        is_active=bool(row.get("is_active", False)),
    )


def save_notice(html_content: str, is_active: bool, now: Optional[datetime] = None) -> Notice:
    """
    Save the notice content and status.

    A fresh notice_id is issued on every save so visitors who dismissed the
    previous version see the new one.
    """

    notice = Notice(
        notice_id=new_notice_id(now or datetime.now(timezone.utc)),
        html_content=html_content,
        is_active=is_active,
    )

    payload: dict[str, Any] = {
        "slot": _NOTICE_SLOT,
        "notice_id": notice.notice_id,
        "html_content": notice.html_content,
        "is_active": notice.is_active,
    }

    response = get_supabase().table(_NOTICE_TABLE).upsert(payload, on_conflict="slot").execute()
    raise_for_error(response, "save notice")
    return notice


__all__ = ["get_notice", "save_notice"]
