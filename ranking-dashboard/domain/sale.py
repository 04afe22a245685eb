"""
Domain: Sale events.

A sale is one contribution from a client, registered by a clerk. Clients are
not stored on their own; they exist only as the set of sales sharing the same
derived identity (see `domain/client.py`).

Rules captured here:
- created_at is a UTC timestamp.
- A sale takes part in the ranking only when both names are non-empty after
  trimming and the amount is absent or a finite, non-negative number.
- Handles are stored with a leading '@'.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional
from uuid import UUID

from .time import require_utc_timestamp


def normalize_handle(value: Optional[str]) -> Optional[str]:
    """
    Normalize a social handle for storage.

    Example:
        normalize_handle(" ana.silva ")  # "@ana.silva"
        normalize_handle("@ana")         # "@ana"
        normalize_handle("   ")          # None
    """

    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    if not text.startswith("@"):
        text = f"@{text}"
    return text


def parse_amount(value: Any) -> Optional[Decimal]:
    """
    Parse a monetary amount.

    Returns None for an absent amount (None or empty string).

    Raises:
        ValueError: If the value is not a finite, non-negative number.
    """

    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"amount must be numeric, got {value!r}")
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None

    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, TypeError) as exc:
        raise ValueError(f"amount must be numeric, got {value!r}") from exc

    if not amount.is_finite():
        raise ValueError(f"amount must be finite, got {value!r}")
    if amount < 0:
        raise ValueError(f"amount must be non-negative, got {value!r}")
    return amount


@dataclass(frozen=True, slots=True)
class SaleRecord:
    """
    Immutable record of a single sale.

    Captures:
    - Who paid (first_name, last_name, optional handle)
    - How much was paid (amount)
    - When it was registered (created_at)

    Records are owned by the store. The ranking engine only reads them.

    amount_error holds the reason a stored amount could not be read; such a
    sale stays visible for correction but is never ranked.
    """

    sale_id: UUID
    first_name: str
    last_name: str
    created_at: datetime
    handle: Optional[str] = None
    amount: Optional[Decimal] = None
    amount_error: Optional[str] = None

    def __post_init__(self) -> None:
        require_utc_timestamp("created_at", self.created_at)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def is_rankable(self) -> bool:
        """Check whether this sale may be aggregated into the ranking."""

        if not isinstance(self.first_name, str) or not self.first_name.strip():
            return False
        if not isinstance(self.last_name, str) or not self.last_name.strip():
            return False
        if self.amount_error is not None:
            return False
        try:
            parse_amount(self.amount)
        except ValueError:
            return False
        return True
