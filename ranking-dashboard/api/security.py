"""
Admin access checks.

Access keys live only in the server environment and are compared here, never
in the browser:
- ADMIN_ACCESS_KEY: unlocks every admin endpoint (header `X-Admin-Key`)
- DELETE_ACCESS_KEY: additionally required to wipe the sales history
  (header `X-Delete-Key`)
"""

from __future__ import annotations

import hmac
import logging
import os
from typing import Optional

from fastapi import Header, HTTPException

logger = logging.getLogger(__name__)


def _check_key(provided: Optional[str], env_var: str, header: str) -> None:
    expected = os.getenv(env_var)
    if not expected:
        raise HTTPException(
            status_code=503,
            detail=f"{env_var} is not configured on the server"
        )

    if not provided or not hmac.compare_digest(provided.encode(), expected.encode()):
        logger.warning("Rejected request with invalid %s header", header)
        raise HTTPException(
            status_code=403,
            detail="Invalid access key"
        )


def require_admin(x_admin_key: Optional[str] = Header(None)) -> None:
    """FastAPI dependency guarding admin endpoints."""
    _check_key(x_admin_key, "ADMIN_ACCESS_KEY", "X-Admin-Key")


def require_delete_key(x_delete_key: Optional[str] = Header(None)) -> None:
    """FastAPI dependency guarding destructive bulk operations."""
    _check_key(x_delete_key, "DELETE_ACCESS_KEY", "X-Delete-Key")
