"""
Sale repository (persistence).

This module provides *only* persistence operations for the SaleRecord domain
entity. It does not rank anything; the ranking is recomputed from the full
snapshot returned by `list_sales()`.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, List, Mapping, Optional
from uuid import UUID, uuid4

from domain.sale import SaleRecord, normalize_handle, parse_amount
from domain.time import parse_utc_timestamp, to_iso_utc
from repositories.client import get_supabase, raise_for_error

logger = logging.getLogger(__name__)

# Supabase table name for sale records.
# Keep this aligned with your database schema.
_SALES_TABLE: str = "sales"


def _row_to_sale(row: Mapping[str, Any]) -> SaleRecord:
    """
    Convert a Supabase row into a SaleRecord.

    An unreadable amount does not drop the row: it is kept with amount=None
    and amount_error set, so it can still be listed, edited or deleted.
    """

    amount: Optional[Decimal] = None
    amount_error: Optional[str] = None
    try:
        amount = parse_amount(row.get("amount"))
    except ValueError as exc:
        amount_error = str(exc)
        logger.warning("Sale %s has an invalid amount: %s", row.get("sale_id"), exc)

    return SaleRecord(
        sale_id=UUID(str(row["sale_id"])),
        first_name=str(row.get("first_name") or ""),
        last_name=str(row.get("last_name") or ""),
        handle=row.get("handle") or None,
        amount=amount,
        amount_error=amount_error,
        created_at=parse_utc_timestamp(row["created_at_utc"]),
    )


def _rows(response: Any) -> List[Mapping[str, Any]]:
    return getattr(response, "data", None) or []


def record_sale(
    first_name: str,
    last_name: str,
    amount: Decimal,
    handle: Optional[str] = None,
    created_at: Optional[datetime] = None,
) -> SaleRecord:
    """
    Insert a new sale into Supabase.

    Args:
        first_name: Client first name (trimmed before storage)
        last_name: Client last name (trimmed before storage)
        amount: Amount paid, non-negative
        handle: Optional social handle (stored with a leading '@')
        created_at: UTC timestamp of the sale (default: now)

    Returns:
        SaleRecord domain model with the recorded sale

    Raises:
        ValueError: If a name is blank or the amount is invalid
    """

    first_name = first_name.strip()
    last_name = last_name.strip()
    if not first_name or not last_name:
        raise ValueError("first_name and last_name are required")

    parsed_amount = parse_amount(amount)
    if parsed_amount is None:
        raise ValueError("amount is required")

    sale = SaleRecord(
        sale_id=uuid4(),
        first_name=first_name,
        last_name=last_name,
        handle=normalize_handle(handle),
        amount=parsed_amount,
        created_at=created_at or datetime.now(timezone.utc),
    )

    payload: dict[str, Any] = {
        "sale_id": str(sale.sale_id),
        "first_name": sale.first_name,
        "last_name": sale.last_name,
        "handle": sale.handle,
        "amount": str(sale.amount),
        "created_at_utc": to_iso_utc(sale.created_at, name="created_at"),
    }

    response = get_supabase().table(_SALES_TABLE).insert(payload).execute()
    raise_for_error(response, "record sale")

    logger.info("Recorded sale %s for %s", sale.sale_id, sale.full_name)
    return sale


def list_sales() -> List[SaleRecord]:
    """
    Retrieve the full snapshot of sales.

    Rows without a readable id or timestamp are skipped and logged, so one bad
    row never hides the rest of the ranking. Rows with an unreadable amount
    are kept (see `_row_to_sale`); the ranking excludes them.

    Returns:
        List[SaleRecord] (possibly empty), in storage order
    """

    response = get_supabase().table(_SALES_TABLE).select("*").execute()
    raise_for_error(response, "list sales")

    sales: List[SaleRecord] = []
    for row in _rows(response):
        try:
            sales.append(_row_to_sale(row))
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Skipping malformed sale row %r: %s", row.get("sale_id"), exc)
    return sales


def get_sale_by_id(sale_id: UUID) -> Optional[SaleRecord]:
    """
    Retrieve a single sale by its ID.

    Returns:
        SaleRecord or None if not found
    """

    response = (
        get_supabase()
        .table(_SALES_TABLE)
        .select("*")
        .eq("sale_id", str(sale_id))
        .limit(1)
        .execute()
    )
    raise_for_error(response, "get sale")

    rows = _rows(response)
    if not rows:
        return None
    return _row_to_sale(rows[0])


def update_sale(
    sale_id: UUID,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    handle: Optional[str] = None,
    amount: Optional[Decimal] = None,
) -> Optional[SaleRecord]:
    """
    Update the editable fields of a sale.

    Only the fields passed (not None) are changed. An empty-string handle
    clears the handle.

    Returns:
        Updated SaleRecord, or None if the sale does not exist

    Raises:
        ValueError: If a name is blank or the amount is invalid
    """

    payload: dict[str, Any] = {}

    if first_name is not None:
        if not first_name.strip():
            raise ValueError("first_name cannot be blank")
        payload["first_name"] = first_name.strip()
    if last_name is not None:
        if not last_name.strip():
            raise ValueError("last_name cannot be blank")
        payload["last_name"] = last_name.strip()
    if handle is not None:
        payload["handle"] = normalize_handle(handle)
    if amount is not None:
        payload["amount"] = str(parse_amount(amount))

    if not payload:
        return get_sale_by_id(sale_id)

    response = (
        get_supabase()
        .table(_SALES_TABLE)
        .update(payload)
        .eq("sale_id", str(sale_id))
        .execute()
    )
    raise_for_error(response, "update sale")

    rows = _rows(response)
    if not rows:
        return None
    return _row_to_sale(rows[0])


def delete_sale(sale_id: UUID) -> bool:
    """
    Delete one sale.

    Returns:
        True if a row was deleted, False if it did not exist
    """

    response = (
        get_supabase()
        .table(_SALES_TABLE)
        .delete()
        .eq("sale_id", str(sale_id))
        .execute()
    )
    raise_for_error(response, "delete sale")
    return bool(_rows(response))


def delete_all_sales() -> int:
    """
    Delete the whole sales history.

    Returns:
        Number of deleted rows
    """

    # PostgREST refuses an unfiltered DELETE; no sale uses the nil UUID
    response = (
        get_supabase()
        .table(_SALES_TABLE)
        .delete()
        .neq("sale_id", "00000000-0000-0000-0000-000000000000")
        .execute()
    )
    raise_for_error(response, "delete all sales")

    deleted = len(_rows(response))
    logger.warning("Deleted entire sales history (%d rows)", deleted)
    return deleted


__all__ = [
    "record_sale",
    "list_sales",
    "get_sale_by_id",
    "update_sale",
    "delete_sale",
    "delete_all_sales",
]
