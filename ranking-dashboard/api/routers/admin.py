"""
Admin API Endpoints.

The front-end calls unlock once with the access key and keeps the result in
its own session state. Every admin endpoint still checks the key itself.
"""

from fastapi import APIRouter, Depends

from api.models import AdminUnlockResponse
from api.security import require_admin
from domain.session import SessionState

router = APIRouter()


@router.post(
    "/admin/unlock",
    response_model=AdminUnlockResponse,
    summary="Unlock Admin Area",
    description="Verify the `X-Admin-Key` header.",
    dependencies=[Depends(require_admin)],
)
def unlock_admin():
    session = SessionState().unlock_admin()
    return AdminUnlockResponse(admin_unlocked=session.admin_unlocked)
