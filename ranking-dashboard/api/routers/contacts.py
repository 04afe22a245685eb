"""
Contacts API Endpoints.

Public list of active WhatsApp contacts and admin management.
"""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from api.models import ContactCreateRequest, ContactResponse
from api.security import require_admin
from domain.contact import ContactLink
from repositories.contact_repository import (
    add_contact,
    delete_contact,
    list_contacts,
    toggle_contact,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _parse_contact_id(contact_id: str) -> UUID:
    try:
        return UUID(contact_id)
    except ValueError:
        raise HTTPException(
            status_code=400,
            detail="Invalid UUID format for contact_id"
        )


def _to_response(contact: ContactLink) -> ContactResponse:
    return ContactResponse(
        contact_id=contact.contact_id,
        number=contact.number,
        label=contact.label,
        is_active=contact.is_active,
        whatsapp_url=contact.whatsapp_url,
    )


def _list(active_only: bool) -> List[ContactResponse]:
    try:
        return [_to_response(c) for c in list_contacts(active_only=active_only)]
    except Exception as e:
        logger.exception("Failed to list contacts")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to list contacts: {str(e)}"
        )


@router.get(
    "/contacts",
    response_model=List[ContactResponse],
    summary="Active Contacts",
    description="WhatsApp contacts currently shown to visitors."
)
def get_active_contacts():
    return _list(active_only=True)


@router.get(
    "/admin/contacts",
    response_model=List[ContactResponse],
    summary="All Contacts",
    dependencies=[Depends(require_admin)],
)
def get_all_contacts():
    return _list(active_only=False)


@router.post(
    "/contacts",
    response_model=ContactResponse,
    status_code=201,
    summary="Add Contact",
    description="Add an active contact. Non-digit characters are stripped from the number.",
    dependencies=[Depends(require_admin)],
)
def create_contact(request: ContactCreateRequest):
    try:
        return _to_response(add_contact(request.number, request.label))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Failed to add contact")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to add contact: {str(e)}"
        )


@router.post(
    "/contacts/{contact_id}/toggle",
    response_model=ContactResponse,
    summary="Toggle Contact",
    dependencies=[Depends(require_admin)],
)
def flip_contact(contact_id: str):
    contact_uuid = _parse_contact_id(contact_id)
    try:
        contact = toggle_contact(contact_uuid)
    except Exception as e:
        logger.exception("Failed to toggle contact %s", contact_id)
        raise HTTPException(
            status_code=500,
            detail=f"Failed to toggle contact: {str(e)}"
        )

    if contact is None:
        raise HTTPException(status_code=404, detail=f"Contact not found: {contact_id}")
    return _to_response(contact)


@router.delete(
    "/contacts/{contact_id}",
    status_code=204,
    summary="Delete Contact",
    dependencies=[Depends(require_admin)],
)
def remove_contact(contact_id: str):
    contact_uuid = _parse_contact_id(contact_id)
    try:
        deleted = delete_contact(contact_uuid)
    except Exception as e:
        logger.exception("Failed to delete contact %s", contact_id)
        raise HTTPException(
            status_code=500,
            detail=f"Failed to delete contact: {str(e)}"
        )

    if not deleted:
        raise HTTPException(status_code=404, detail=f"Contact not found: {contact_id}")
