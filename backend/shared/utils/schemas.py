"""
Shared Pydantic schemas for authentication, ordering and payments.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from shared.config.constants import Limits


# =============================================================================
# Common Types
# =============================================================================

Role = Literal["SUPER_ADMIN", "ADMIN", "MANAGER", "KITCHEN", "WAITER", "DELIVERY"]
OrderStatus = Literal["NEW", "ACCEPTED", "IN_PROGRESS", "COMPLETED", "DELIVERED", "PAID", "CANCELLED"]
PaymentMethod = Literal["CASH", "CARD", "UPI"]
TableStatus = Literal["AVAILABLE", "OCCUPIED", "RESERVED"]


class ErrorResponse(BaseModel):
    """Body of every error response."""

    detail: str


# =============================================================================
# Authentication Schemas
# =============================================================================


class LoginRequest(BaseModel):
    """Login request body."""

    email: EmailStr
    password: str = Field(min_length=1)


class UserInfo(BaseModel):
    """Basic user information included in auth responses."""

    id: int
    name: str
    email: str
    role: Role
    cafe_id: int | None = None


class LoginResponse(BaseModel):
    """Login response with the access token; the refresh token travels as a cookie."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int  # seconds
    user: UserInfo


class SuperAdminStatus(BaseModel):
    exists: bool
    count: int
    message: str


class SuperAdminRegister(BaseModel):
    """Bootstrap request for the first platform administrator."""

    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    email: EmailStr
    password: str = Field(min_length=Limits.MIN_PASSWORD_LENGTH, max_length=128)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v


# =============================================================================
# Order Schemas
# =============================================================================


class OrderLineInput(BaseModel):
    """One cart entry."""

    menu_item_id: int = Field(gt=0)
    quantity: int = Field(ge=Limits.MIN_QUANTITY, le=Limits.MAX_QUANTITY)
    notes: str | None = Field(default=None, max_length=Limits.MAX_NOTES_LENGTH)


class OrderCreate(BaseModel):
    """Cart submitted by a customer holding a table slug."""

    table_slug: str = Field(min_length=1, max_length=Limits.MAX_SLUG_LENGTH)
    items: list[OrderLineInput] = Field(min_length=1, max_length=Limits.MAX_ORDER_LINES)
    notes: str | None = Field(default=None, max_length=Limits.MAX_NOTES_LENGTH)


class OrderLineOutput(BaseModel):
    id: int
    menu_item_id: int | None = None
    name_snapshot: str
    price_snapshot_cents: int
    quantity: int
    notes: str | None = None
    line_total_cents: int

    model_config = ConfigDict(from_attributes=True)


class PaymentOutput(BaseModel):
    id: int
    method: PaymentMethod
    amount_cents: int
    reference: str | None = None
    recorded_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrderOutput(BaseModel):
    """Order snapshot returned by the API and published in events."""

    id: int
    cafe_id: int
    table_id: int
    table_slug: str | None = None
    status: OrderStatus
    subtotal_cents: int
    tax_cents: int
    total_cents: int
    paid_cents: int
    balance_cents: int
    customer_notes: str | None = None
    accepted_by_id: int | None = None
    completed_by_id: int | None = None
    delivered_by_id: int | None = None
    lines: list[OrderLineOutput] = []
    payments: list[PaymentOutput] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class StatusUpdate(BaseModel):
    """Staff request to move an order to another status."""

    status: OrderStatus


class PaymentCreate(BaseModel):
    """Payment posted against an order."""

    method: PaymentMethod
    amount_cents: int = Field(gt=0, le=Limits.MAX_PAYMENT_CENTS)
    reference: str | None = Field(default=None, max_length=Limits.MAX_REFERENCE_LENGTH)


class PublicCancelRequest(BaseModel):
    """Cancellation request from the table holder."""

    table_slug: str | None = Field(default=None, max_length=Limits.MAX_SLUG_LENGTH)
