"""
Domain: Broadcast notice.

There is a single notice. Every save issues a new notice_id, so a visitor who
dismissed an earlier version sees the notice again after it changes.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from .time import require_utc_timestamp

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def new_notice_id(now: datetime) -> str:
    """Build a version id of the form `notice-<epoch millis>`."""

    require_utc_timestamp("now", now)
    millis = (now - _EPOCH) // timedelta(milliseconds=1)
    return f"notice-{millis}"


@dataclass(frozen=True, slots=True)
class Notice:
    notice_id: str
    html_content: str = ""
    is_active: bool = False
