"""
Notice API Endpoints.

Public read of the broadcast notice and admin save.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.models import NoticeRequest, NoticeResponse
from api.security import require_admin
from domain.session import SessionState, should_show_notice
from repositories.notice_repository import get_notice, save_notice

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/notice",
    response_model=NoticeResponse,
    summary="Broadcast Notice",
    description="Current notice and whether this visitor should be shown it."
)
def read_notice(
    dismissed_notice_id: Optional[str] = Query(
        None,
        description="notice_id the visitor already closed in this session"
    ),
):
    """
    Return the notice.

    `show` is true when the notice is active and the visitor has not yet
    dismissed this version. The front-end keeps the dismissed id in its own
    session and sends it back here.
    """
    try:
        notice = get_notice()
    except Exception as e:
        logger.exception("Failed to fetch notice")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to fetch notice: {str(e)}"
        )

    if notice is None:
        return NoticeResponse()

    session = SessionState(dismissed_notice_id=dismissed_notice_id)
    return NoticeResponse(
        notice_id=notice.notice_id,
        html_content=notice.html_content,
        is_active=notice.is_active,
        show=should_show_notice(notice, session),
    )


@router.put(
    "/notice",
    response_model=NoticeResponse,
    summary="Save Notice",
    description="Save the notice content and status. Issues a new notice_id.",
    dependencies=[Depends(require_admin)],
)
def write_notice(request: NoticeRequest):
    try:
        notice = save_notice(request.html_content, request.is_active)
    except Exception as e:
        logger.exception("Failed to save notice")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to save notice: {str(e)}"
        )

    return NoticeResponse(
        notice_id=notice.notice_id,
        html_content=notice.html_content,
        is_active=notice.is_active,
        show=notice.is_active,
    )
