"""
API Request and Response Models.

Pydantic models for validating API requests and serializing responses.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field


# ============================================================================
# Ranking Models
# ============================================================================

class LeaderboardEntryResponse(BaseModel):
    """Single leaderboard row. total_amount is null when not disclosed."""
    rank: int
    first_name: str
    last_name: str
    handle: Optional[str] = None
    total_amount: Optional[Decimal] = None
    disclosed: bool
    amount_label: str  # "150.00" or "private"

    class Config:
        json_schema_extra = {
            "example": {
                "rank": 1,
                "first_name": "Ana",
                "last_name": "Silva",
                "handle": "@anasilva",
                "total_amount": "150.00",
                "disclosed": True,
                "amount_label": "150.00"
            }
        }


class LeaderboardResponse(BaseModel):
    """Response for the public leaderboard."""
    entries: List[LeaderboardEntryResponse]
    total_clients: int
    is_empty: bool
    currency: str

    class Config:
        json_schema_extra = {
            "example": {
                "entries": [],
                "total_clients": 0,
                "is_empty": True,
                "currency": "BRL"
            }
        }


# ============================================================================
# Sale Models
# ============================================================================

class SaleCreateRequest(BaseModel):
    """Request to register a new sale."""
    first_name: str = Field(..., min_length=1, description="Client first name")
    last_name: str = Field(..., min_length=1, description="Client last name")
    handle: Optional[str] = Field(None, description="Instagram handle, '@' optional")
    amount: Decimal = Field(..., ge=0, description="Amount paid")

    class Config:
        json_schema_extra = {
            "example": {
                "first_name": "Ana",
                "last_name": "Silva",
                "handle": "anasilva",
                "amount": "100.00"
            }
        }


class SaleUpdateRequest(BaseModel):
    """Partial update of a sale. Omitted fields are left unchanged."""
    first_name: Optional[str] = Field(None, min_length=1)
    last_name: Optional[str] = Field(None, min_length=1)
    handle: Optional[str] = None
    amount: Optional[Decimal] = Field(None, ge=0)


class SaleResponse(BaseModel):
    """Single sale in API responses."""
    sale_id: UUID
    first_name: str
    last_name: str
    handle: Optional[str] = None
    amount: Optional[Decimal] = None
    amount_error: Optional[str] = None  # set when the stored amount is unreadable
    created_at: datetime


class SaleListResponse(BaseModel):
    """Sales history, newest first."""
    items: List[SaleResponse]
    total_count: int


class ClientSuggestion(BaseModel):
    """Existing client offered while typing a name."""
    first_name: str
    last_name: str
    handle: Optional[str] = None


class DeleteAllResponse(BaseModel):
    deleted_count: int


# ============================================================================
# Notice Models
# ============================================================================

class NoticeRequest(BaseModel):
    """Request to save the broadcast notice."""
    html_content: str = ""
    is_active: bool = False


class NoticeResponse(BaseModel):
    """Broadcast notice and whether this visitor should see it."""
    notice_id: Optional[str] = None
    html_content: str = ""
    is_active: bool = False
    show: bool = False

    class Config:
        json_schema_extra = {
            "example": {
                "notice_id": "notice-1735689600000",
                "html_content": "<b>Promo</b> this weekend!",
                "is_active": True,
                "show": True
            }
        }


# ============================================================================
# Contact Models
# ============================================================================

class ContactCreateRequest(BaseModel):
    """Request to add a WhatsApp contact."""
    number: str = Field(..., min_length=1, description="Phone number, any format")
    label: str = Field(..., min_length=1, description="Link label, e.g. 'Vendas'")


class ContactResponse(BaseModel):
    contact_id: UUID
    number: str
    label: str
    is_active: bool
    whatsapp_url: str


# ============================================================================
# Admin Models
# ============================================================================

class AdminUnlockResponse(BaseModel):
    admin_unlocked: bool
