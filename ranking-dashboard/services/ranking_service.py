"""
Ranking service for the client leaderboard.

Turns the full, unordered snapshot of sales into a bounded leaderboard:
- Groups sales by ClientIdentity in a single stable pass
- Sums amounts per client (absent amount counts as zero)
- Sorts by total, descending; ties keep first-seen order
- Keeps the top N and redacts totals below the visible ranks

Every function here is pure. Nothing is cached between calls, so the result
of the latest snapshot is always the only one that matters.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Dict, Iterable, List

from domain.client import ClientIdentity
from domain.ranking import LeaderboardEntry, RankedClient
from domain.sale import SaleRecord, normalize_handle, parse_amount

logger = logging.getLogger(__name__)

DEFAULT_TOP_N: int = 10
DEFAULT_VISIBLE_COUNT: int = 3


def _require_count(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


def _rankable(records: Iterable[SaleRecord]) -> Iterable[SaleRecord]:
    """Yield only sales that can take part in the ranking."""

    for record in records:
        try:
            ok = record.is_rankable()
        except AttributeError:
            ok = False
        if ok:
            yield record
        else:
            logger.debug("Excluding malformed sale from ranking: %r", record)


def aggregate_clients(records: Iterable[SaleRecord]) -> List[RankedClient]:
    """
    Group sales per client and total their amounts.

    Returns one RankedClient per distinct identity, in first-seen order and
    with rank 0. Display fields come from the last-seen sale of each client.

    Example:
        clients = aggregate_clients(list_sales())
        grand_total = sum(c.total_amount for c in clients)
    """

    totals: Dict[ClientIdentity, Decimal] = {}
    counts: Dict[ClientIdentity, int] = {}
    latest: Dict[ClientIdentity, SaleRecord] = {}

    for record in _rankable(records):
        identity = ClientIdentity.of(record)
        amount = parse_amount(record.amount) or Decimal("0")
        totals[identity] = totals.get(identity, Decimal("0")) + amount
        counts[identity] = counts.get(identity, 0) + 1
        latest[identity] = record

    return [
        RankedClient(
            identity=identity,
            first_name=latest[identity].first_name.strip(),
            last_name=latest[identity].last_name.strip(),
            handle=normalize_handle(latest[identity].handle),
            total_amount=total,
            sale_count=counts[identity],
        )
        for identity, total in totals.items()
    ]


def rank_clients(records: Iterable[SaleRecord]) -> List[RankedClient]:
    """Rank every client by total, highest first (no truncation)."""

    # sorted() is stable: equal totals keep first-seen order
    ordered = sorted(aggregate_clients(records), key=lambda c: c.total_amount, reverse=True)
    return [replace(client, rank=position) for position, client in enumerate(ordered, start=1)]


def compute_ranking(
    records: Iterable[SaleRecord],
    top_n: int = DEFAULT_TOP_N,
    visible_count: int = DEFAULT_VISIBLE_COUNT,
) -> List[LeaderboardEntry]:
    """
    Build the public leaderboard from a full sales snapshot.

    Args:
        records: Every sale currently in the store (may be empty)
        top_n: Maximum number of entries to return (default: 10)
        visible_count: Number of top ranks whose total is disclosed (default: 3)

    Returns:
        Up to top_n LeaderboardEntry values, rank 1 first. Entries ranked
        below visible_count have total_amount=None and disclosed=False.

    Raises:
        ValueError: If top_n or visible_count is negative or not an integer

    Example:
        entries = compute_ranking(list_sales())
        for entry in entries:
            print(entry.rank, entry.full_name, entry.amount_label)
    """

    _require_count("top_n", top_n)
    _require_count("visible_count", visible_count)

    ranked = rank_clients(records)[:top_n]

    return [
        LeaderboardEntry(
            rank=client.rank,
            first_name=client.first_name,
            last_name=client.last_name,
            handle=client.handle,
            total_amount=client.total_amount if client.rank <= visible_count else None,
            disclosed=client.rank <= visible_count,
        )
        for client in ranked
    ]


def unique_clients(records: Iterable[SaleRecord]) -> List[SaleRecord]:
    """Return the first sale seen for each distinct client."""

    seen: set[ClientIdentity] = set()
    result: List[SaleRecord] = []
    for record in _rankable(records):
        identity = ClientIdentity.of(record)
        if identity in seen:
            continue
        seen.add(identity)
        result.append(record)
    return result


def suggest_clients(records: Iterable[SaleRecord], prefix: str, limit: int = 10) -> List[SaleRecord]:
    """
    Autocomplete existing clients while a clerk types a name.

    Matches when the first or last name starts with `prefix`, ignoring case.
    A blank prefix yields no suggestions.
    """

    _require_count("limit", limit)
    if not prefix or not prefix.strip():
        return []
    matches = [r for r in unique_clients(records) if ClientIdentity.of(r).matches_prefix(prefix)]
    return matches[:limit]


def sales_history(records: Iterable[SaleRecord]) -> List[SaleRecord]:
    """Return every sale, newest first."""

    return sorted(records, key=lambda r: r.created_at, reverse=True)


__all__ = [
    "DEFAULT_TOP_N",
    "DEFAULT_VISIBLE_COUNT",
    "aggregate_clients",
    "rank_clients",
    "compute_ranking",
    "unique_clients",
    "suggest_clients",
    "sales_history",
]
