"""
Pydantic schemas for administration endpoints: cafes, subscription plans,
staff users, tables and menu items.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from shared.config.constants import Limits
from shared.utils.schemas import Role, TableStatus
from shared.utils.validators import validate_image_url, validate_slug

CafeStatus = Literal["ACTIVE", "SUSPENDED", "DELETED"]
CafePaymentStatus = Literal["ACTIVE", "EXPIRED", "OVERDUE"]
PlanType = Literal["MONTHLY", "YEARLY", "TRIAL"]
StaffRole = Literal["ADMIN", "MANAGER", "KITCHEN", "WAITER", "DELIVERY"]
UserStatus = Literal["ACTIVE", "INACTIVE"]


# =============================================================================
# Subscription Plan Schemas
# =============================================================================


class PlanOutput(BaseModel):
    id: int
    name: str
    plan_type: PlanType
    price_cents: int
    features: list[str] = []
    max_tables: int
    max_staff: int
    is_active: bool
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class PlanCreate(BaseModel):
    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    plan_type: PlanType = "MONTHLY"
    price_cents: int = Field(default=0, ge=0, le=Limits.MAX_PRICE_CENTS)
    features: list[str] = []
    max_tables: int = Field(default=10, ge=1)
    max_staff: int = Field(default=5, ge=1)


class PlanUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    plan_type: PlanType | None = None
    price_cents: int | None = Field(default=None, ge=0, le=Limits.MAX_PRICE_CENTS)
    features: list[str] | None = None
    max_tables: int | None = Field(default=None, ge=1)
    max_staff: int | None = Field(default=None, ge=1)


# =============================================================================
# Cafe Schemas
# =============================================================================


class CafeOutput(BaseModel):
    id: int
    name: str
    logo_url: str | None = None
    address: str | None = None
    contact_number: str | None = None
    contact_email: str | None = None
    subscription_plan_id: int | None = None
    kitchen_enabled: bool
    waiter_enabled: bool
    manager_enabled: bool
    custom_domain: str | None = None
    status: CafeStatus
    payment_status: CafePaymentStatus
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class CafePublicOutput(BaseModel):
    """Branding shown to customers on the table page."""

    id: int
    name: str
    logo_url: str | None = None
    address: str | None = None

    model_config = ConfigDict(from_attributes=True)


class CafeCreate(BaseModel):
    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    logo_url: str | None = None
    address: str | None = Field(default=None, max_length=500)
    contact_number: str | None = Field(default=None, max_length=50)
    contact_email: EmailStr | None = None
    subscription_plan_id: int | None = None
    kitchen_enabled: bool = True
    waiter_enabled: bool = True
    manager_enabled: bool = True
    custom_domain: str | None = Field(default=None, max_length=255)

    @field_validator("logo_url")
    @classmethod
    def check_logo_url(cls, v: str | None) -> str | None:
        return validate_image_url(v)


class CafeUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    logo_url: str | None = None
    address: str | None = Field(default=None, max_length=500)
    contact_number: str | None = Field(default=None, max_length=50)
    contact_email: EmailStr | None = None
    subscription_plan_id: int | None = None
    kitchen_enabled: bool | None = None
    waiter_enabled: bool | None = None
    manager_enabled: bool | None = None
    custom_domain: str | None = Field(default=None, max_length=255)
    status: CafeStatus | None = None
    payment_status: CafePaymentStatus | None = None

    @field_validator("logo_url")
    @classmethod
    def check_logo_url(cls, v: str | None) -> str | None:
        return validate_image_url(v)


# =============================================================================
# Staff Schemas
# =============================================================================


class UserOutput(BaseModel):
    """Staff account; the password hash is never exposed."""

    id: int
    name: str
    email: str
    role: Role
    cafe_id: int | None = None
    status: UserStatus
    is_active: bool
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class UserCreate(BaseModel):
    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    email: EmailStr
    password: str = Field(min_length=Limits.MIN_PASSWORD_LENGTH, max_length=128)
    role: StaffRole
    cafe_id: int


class UserUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=Limits.MIN_PASSWORD_LENGTH, max_length=128)
    role: StaffRole | None = None
    cafe_id: int | None = None
    status: UserStatus | None = None


# =============================================================================
# Table Schemas
# =============================================================================


class TableOutput(BaseModel):
    id: int
    cafe_id: int
    table_number: int
    slug: str
    capacity: int
    status: TableStatus
    is_active: bool
    order_url: str | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class TableCreate(BaseModel):
    cafe_id: int | None = None  # Defaults to the caller's cafe
    table_number: int = Field(ge=1)
    slug: str | None = None  # Generated from the number when omitted
    capacity: int = Field(default=4, ge=1, le=50)

    @field_validator("slug")
    @classmethod
    def check_slug(cls, v: str | None) -> str | None:
        return validate_slug(v) if v is not None else None


class TableUpdate(BaseModel):
    table_number: int | None = Field(default=None, ge=1)
    slug: str | None = None
    capacity: int | None = Field(default=None, ge=1, le=50)
    status: TableStatus | None = None
    is_active: bool | None = None

    @field_validator("slug")
    @classmethod
    def check_slug(cls, v: str | None) -> str | None:
        return validate_slug(v) if v is not None else None


class PublicTableOutput(BaseModel):
    """What a customer learns from scanning the table code."""

    slug: str
    table_number: int
    cafe: CafePublicOutput


# =============================================================================
# Menu Schemas
# =============================================================================


class MenuItemOutput(BaseModel):
    id: int
    cafe_id: int
    name: str
    description: str | None = None
    price_cents: int
    category: str
    is_available: bool
    is_vegetarian: bool
    preparation_minutes: int
    image_url: str | None = None

    model_config = ConfigDict(from_attributes=True)


class MenuItemCreate(BaseModel):
    cafe_id: int | None = None  # Defaults to the caller's cafe
    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    description: str | None = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    price_cents: int = Field(ge=Limits.MIN_PRICE_CENTS, le=Limits.MAX_PRICE_CENTS)
    category: str = Field(default="General", min_length=1, max_length=100)
    is_available: bool = True
    is_vegetarian: bool = False
    preparation_minutes: int = Field(default=15, ge=0, le=240)
    image_url: str | None = None

    @field_validator("image_url")
    @classmethod
    def check_image_url(cls, v: str | None) -> str | None:
        return validate_image_url(v)


class MenuItemUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    description: str | None = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    price_cents: int | None = Field(default=None, ge=Limits.MIN_PRICE_CENTS, le=Limits.MAX_PRICE_CENTS)
    category: str | None = Field(default=None, min_length=1, max_length=100)
    is_available: bool | None = None
    is_vegetarian: bool | None = None
    preparation_minutes: int | None = Field(default=None, ge=0, le=240)
    image_url: str | None = None

    @field_validator("image_url")
    @classmethod
    def check_image_url(cls, v: str | None) -> str | None:
        return validate_image_url(v)


class SeedResult(BaseModel):
    cafe_id: int
    tables_created: int
    menu_items_created: int
