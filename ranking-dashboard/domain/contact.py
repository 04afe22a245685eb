"""
Domain: WhatsApp contact links.

Active contacts are shown to every visitor as wa.me links. Numbers are kept
as digits only (country code included, no '+').
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from .time import require_utc_timestamp

_NON_DIGITS = re.compile(r"\D")


def sanitize_phone_number(raw: str) -> str:
    """
    Strip every non-digit character from a phone number.

    Example:
        sanitize_phone_number("+55 (41) 99999-8888")  # "5541999998888"

    Raises:
        ValueError: If no digits remain.
    """

    digits = _NON_DIGITS.sub("", raw or "")
    if not digits:
        raise ValueError(f"phone number has no digits: {raw!r}")
    return digits


@dataclass(frozen=True, slots=True)
class ContactLink:
    contact_id: UUID
    number: str
    label: str
    is_active: bool = True
    created_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if not self.number.isdigit():
            raise ValueError("number must contain digits only")
        if self.created_at is not None:
            require_utc_timestamp("created_at", self.created_at)

    @property
    def whatsapp_url(self) -> str:
        return f"https://wa.me/{self.number}"
