"""
Ranking API Endpoints.

Public leaderboard, recomputed from the full sales snapshot on every request.
"""

import logging

from fastapi import APIRouter, HTTPException, Query

from api.models import LeaderboardEntryResponse, LeaderboardResponse
from repositories.sale_repository import list_sales
from services.ranking_service import (
    DEFAULT_TOP_N,
    DEFAULT_VISIBLE_COUNT,
    aggregate_clients,
    compute_ranking,
)

logger = logging.getLogger(__name__)

router = APIRouter()

CURRENCY = "BRL"


@router.get(
    "/ranking",
    response_model=LeaderboardResponse,
    summary="Top Clients Leaderboard",
    description="Top clients by total amount paid. Totals below the visible ranks are private."
)
def get_ranking(
    top_n: int = Query(DEFAULT_TOP_N, ge=0, le=100, description="Maximum number of entries"),
    visible_count: int = Query(DEFAULT_VISIBLE_COUNT, ge=0, le=100, description="Ranks whose total is shown"),
):
    """
    Compute the leaderboard from every registered sale.

    Sales are grouped per client (first name, last name and handle, ignoring
    case), summed, and sorted by total. Only the first `visible_count` ranks
    expose their total; the rest carry `"amount_label": "private"`.

    **Example usage:**
    - Default top 10: `GET /api/v1/ranking`
    - Top 5, totals hidden: `GET /api/v1/ranking?top_n=5&visible_count=0`
    """
    try:
        sales = list_sales()
        entries = compute_ranking(sales, top_n=top_n, visible_count=visible_count)

        return LeaderboardResponse(
            entries=[
                LeaderboardEntryResponse(
                    rank=entry.rank,
                    first_name=entry.first_name,
                    last_name=entry.last_name,
                    handle=entry.handle,
                    total_amount=entry.total_amount,
                    disclosed=entry.disclosed,
                    amount_label=entry.amount_label,
                )
                for entry in entries
            ],
            total_clients=len(aggregate_clients(sales)),
            is_empty=not entries,
            currency=CURRENCY,
        )

    except Exception as e:
        logger.exception("Failed to compute ranking")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to compute ranking: {str(e)}"
        )
