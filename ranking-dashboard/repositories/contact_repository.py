"""
Contact repository for WhatsApp contact links.

Provides functions to add, list, toggle and delete contacts.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional
from uuid import UUID, uuid4

from domain.contact import ContactLink, sanitize_phone_number
from domain.time import parse_utc_timestamp
from repositories.client import get_supabase, raise_for_error

_CONTACTS_TABLE: str = "contacts"


def _row_to_contact(row: Mapping[str, Any]) -> ContactLink:
    return ContactLink(
        contact_id=UUID(str(row["contact_id"])),
        number=str(row["number"]),
        label=str(row.get("label") or ""),
        is_active=bool(row.get("is_active", False)),
        created_at=parse_utc_timestamp(row["created_at_utc"]) if row.get("created_at_utc") else None,
    )


def add_contact(number: str, label: str) -> ContactLink:
    """
    Add an active contact.

    Args:
        number: Phone number in any format; only digits are kept
        label: Text shown on the link (e.g. "Vendas")

    Raises:
        ValueError: If the number has no digits or the label is blank

    Example:
        contact = add_contact("+55 41 99999-8888", "Vendas")
        print(contact.whatsapp_url)  # https://wa.me/5541999998888
    """

    if not label or not label.strip():
        raise ValueError("label is required")

    contact = ContactLink(
        contact_id=uuid4(),
        number=sanitize_phone_number(number),
        label=label.strip(),
        is_active=True,
        created_at=datetime.now(timezone.utc),
    )

    payload: dict[str, Any] = {
        "contact_id": str(contact.contact_id),
        "number": contact.number,
        "label": contact.label,
        "is_active": contact.is_active,
        "created_at_utc": contact.created_at.isoformat() if contact.created_at else None,
    }

    response = get_supabase().table(_CONTACTS_TABLE).insert(payload).execute()
    raise_for_error(response, "add contact")
    return contact


def list_contacts(active_only: bool = False) -> List[ContactLink]:
    """
    List contacts.

    Args:
        active_only: Only return contacts shown to visitors
    """

    query = get_supabase().table(_CONTACTS_TABLE).select("*")
    if active_only:
        query = query.eq("is_active", True)
    response = query.execute()
    raise_for_error(response, "list contacts")

    rows = getattr(response, "data", None) or []
    return [_row_to_contact(row) for row in rows]


def get_contact_by_id(contact_id: UUID) -> Optional[ContactLink]:
    response = (
        get_supabase()
        .table(_CONTACTS_TABLE)
        .select("*")
        .eq("contact_id", str(contact_id))
        .limit(1)
        .execute()
    )
    raise_for_error(response, "fetch contact")

    rows = getattr(response, "data", None) or []
    if not rows:
        return None
    return _row_to_contact(rows[0])


def set_contact_active(contact_id: UUID, is_active: bool) -> None:
    response = (
        get_supabase()
        .table(_CONTACTS_TABLE)
        .update({"is_active": is_active})
        .eq("contact_id", str(contact_id))
        .execute()
    )
    raise_for_error(response, "update contact")


def toggle_contact(contact_id: UUID) -> Optional[ContactLink]:
    """
    Flip a contact between active and inactive.

    Returns:
        The contact with its new status, or None if it does not exist
    """

    contact = get_contact_by_id(contact_id)
    if contact is None:
        return None

    set_contact_active(contact_id, not contact.is_active)
    return replace(contact, is_active=not contact.is_active)


def delete_contact(contact_id: UUID) -> bool:
    """Delete a contact. Returns False if it did not exist."""

    response = (
        get_supabase()
        .table(_CONTACTS_TABLE)
        .delete()
        .eq("contact_id", str(contact_id))
        .execute()
    )
    raise_for_error(response, "delete contact")
    return bool(getattr(response, "data", None))


__all__ = [
    "add_contact",
    "list_contacts",
    "get_contact_by_id",
    "set_contact_active",
    "toggle_contact",
    "delete_contact",
]
