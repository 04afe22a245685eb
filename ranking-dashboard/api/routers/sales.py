"""
Sales API Endpoints (admin).

Register, edit and delete sales, browse the history and autocomplete client
names. Every endpoint requires the `X-Admin-Key` header.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query

from api.models import (
    ClientSuggestion,
    DeleteAllResponse,
    SaleCreateRequest,
    SaleListResponse,
    SaleResponse,
    SaleUpdateRequest,
)
from api.security import require_admin, require_delete_key
from domain.sale import SaleRecord
from repositories.sale_repository import (
    delete_all_sales,
    delete_sale,
    list_sales,
    record_sale,
    update_sale,
)
from services.ranking_service import sales_history, suggest_clients

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])


def _parse_sale_id(sale_id: str) -> UUID:
    try:
        return UUID(sale_id)
    except ValueError:
        raise HTTPException(
            status_code=400,
            detail="Invalid UUID format for sale_id"
        )


def _to_response(sale: SaleRecord) -> SaleResponse:
    return SaleResponse(
        sale_id=sale.sale_id,
        first_name=sale.first_name,
        last_name=sale.last_name,
        handle=sale.handle,
        amount=sale.amount,
        amount_error=sale.amount_error,
        created_at=sale.created_at,
    )


@router.get(
    "/sales",
    response_model=SaleListResponse,
    summary="Sales History",
    description="Every registered sale, newest first."
)
def get_sales_history():
    try:
        items = [_to_response(sale) for sale in sales_history(list_sales())]
        return SaleListResponse(items=items, total_count=len(items))
    except Exception as e:
        logger.exception("Failed to list sales")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to list sales: {str(e)}"
        )


@router.post(
    "/sales",
    response_model=SaleResponse,
    status_code=201,
    summary="Register Sale",
    description="Register a new sale. The handle gets a leading '@' if missing."
)
def create_sale(request: SaleCreateRequest):
    """
    Register a sale for a client.

    Names are trimmed. Sales whose names match an existing client (ignoring
    case) add to that client's total.

    **Example request:**
    ```json
    {"first_name": "Ana", "last_name": "Silva", "handle": "anasilva", "amount": "100.00"}
    ```
    """
    try:
        sale = record_sale(
            first_name=request.first_name,
            last_name=request.last_name,
            handle=request.handle,
            amount=request.amount,
        )
        return _to_response(sale)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Failed to record sale")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to record sale: {str(e)}"
        )


@router.patch(
    "/sales/{sale_id}",
    response_model=SaleResponse,
    summary="Edit Sale",
)
def edit_sale(sale_id: str, request: SaleUpdateRequest):
    sale_uuid = _parse_sale_id(sale_id)
    try:
        sale = update_sale(
            sale_uuid,
            first_name=request.first_name,
            last_name=request.last_name,
            handle=request.handle,
            amount=request.amount,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Failed to update sale %s", sale_id)
        raise HTTPException(
            status_code=500,
            detail=f"Failed to update sale: {str(e)}"
        )

    if sale is None:
        raise HTTPException(status_code=404, detail=f"Sale not found: {sale_id}")
    return _to_response(sale)


@router.delete(
    "/sales/{sale_id}",
    status_code=204,
    summary="Delete Sale",
)
def remove_sale(sale_id: str):
    sale_uuid = _parse_sale_id(sale_id)
    try:
        deleted = delete_sale(sale_uuid)
    except Exception as e:
        logger.exception("Failed to delete sale %s", sale_id)
        raise HTTPException(
            status_code=500,
            detail=f"Failed to delete sale: {str(e)}"
        )

    if not deleted:
        raise HTTPException(status_code=404, detail=f"Sale not found: {sale_id}")


@router.delete(
    "/sales",
    response_model=DeleteAllResponse,
    summary="Delete Sales History",
    description="Delete every sale. Requires the `X-Delete-Key` header as well.",
    dependencies=[Depends(require_delete_key)],
)
def remove_all_sales():
    try:
        return DeleteAllResponse(deleted_count=delete_all_sales())
    except Exception as e:
        logger.exception("Failed to delete sales history")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to delete sales history: {str(e)}"
        )


@router.get(
    "/clients/suggestions",
    response_model=list[ClientSuggestion],
    summary="Autocomplete Clients",
    description="Existing clients whose first or last name starts with the prefix."
)
def get_client_suggestions(
    prefix: str = Query("", description="Start of a first or last name"),
    limit: int = Query(10, ge=1, le=50),
):
    try:
        return [
            ClientSuggestion(first_name=s.first_name, last_name=s.last_name, handle=s.handle)
            for s in suggest_clients(list_sales(), prefix, limit=limit)
        ]
    except Exception as e:
        logger.exception("Failed to suggest clients")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to suggest clients: {str(e)}"
        )
