"""
Domain: Visitor session state.

Session flags are explicit values handed to whoever renders the dashboard,
never process-wide globals. Transitions return new instances.

Unlocking the admin area here is a display concern only. Authorization for
admin operations is always checked server-side (see `api/security.py`).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from .notice import Notice


@dataclass(frozen=True, slots=True)
class SessionState:
    admin_unlocked: bool = False
    dismissed_notice_id: Optional[str] = None

    def unlock_admin(self) -> "SessionState":
        return replace(self, admin_unlocked=True)

    def dismiss(self, notice: Notice) -> "SessionState":
        """Remember that this version of the notice was closed."""
        return replace(self, dismissed_notice_id=notice.notice_id)


def should_show_notice(notice: Optional[Notice], session: SessionState) -> bool:
    """A notice is shown when it is active and its current version was not dismissed."""

    if notice is None or not notice.is_active:
        return False
    return notice.notice_id != session.dismissed_notice_id
