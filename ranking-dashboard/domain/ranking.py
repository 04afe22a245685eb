"""
Domain: Ranking read models.

These values are transient. They are rebuilt from the full sales snapshot on
every ranking pass and are never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .client import ClientIdentity

# Shown in place of a total that is not disclosed at the entry's rank.
PRIVATE_AMOUNT: str = "private"


@dataclass(frozen=True, slots=True)
class RankedClient:
    """
    Aggregate of all sales sharing one ClientIdentity.

    Display fields (first_name, last_name, handle) are copied from the
    last-seen contributing sale. rank is 1-based once ranked, 0 before.
    """

    identity: ClientIdentity
    first_name: str
    last_name: str
    handle: Optional[str]
    total_amount: Decimal
    sale_count: int
    rank: int = 0


@dataclass(frozen=True, slots=True)
class LeaderboardEntry:
    """
    Leaderboard row as exposed to the presentation layer.

    total_amount is None whenever disclosed is False.
    """

    rank: int
    first_name: str
    last_name: str
    handle: Optional[str]
    total_amount: Optional[Decimal]
    disclosed: bool

    def __post_init__(self) -> None:
        if self.disclosed and self.total_amount is None:
            raise ValueError("disclosed entries must carry a total_amount")
        if not self.disclosed and self.total_amount is not None:
            raise ValueError("redacted entries must not carry a total_amount")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def amount_label(self) -> str:
        """Total formatted with two decimals, or the privacy sentinel."""
        if not self.disclosed or self.total_amount is None:
            return PRIVATE_AMOUNT
        return f"{self.total_amount:.2f}"
