"""
Domain: Client identity.

A client is never persisted on its own. Two sales belong to the same client
iff their identities are equal, where the identity is the case-insensitive
(first_name, last_name, handle) triple.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .sale import SaleRecord


def _fold(value: Optional[str]) -> str:
    if value is None:
        return ""
    return str(value).strip().lower()


@dataclass(frozen=True, slots=True)
class ClientIdentity:
    """
    Derived deduplication key for a client.

    Fields are compared individually, so a name containing any separator-like
    character never collides with a different client.
    """

    first_name: str
    last_name: str
    handle: str = ""

    @classmethod
    def of(cls, record: SaleRecord) -> "ClientIdentity":
        """Derive the identity of the client behind a sale."""
        return cls(
            first_name=_fold(record.first_name),
            last_name=_fold(record.last_name),
            handle=_fold(record.handle),
        )

    def matches_prefix(self, prefix: str) -> bool:
        """Check if the first or last name starts with `prefix` (case-insensitive)."""
        folded = _fold(prefix)
        if not folded:
            return False
        return self.first_name.startswith(folded) or self.last_name.startswith(folded)
