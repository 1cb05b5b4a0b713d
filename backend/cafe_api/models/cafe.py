"""
Tenant models: SubscriptionPlan, Cafe.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import JSON, BigInteger, Boolean, CheckConstraint, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import CafePaymentStatus, CafeStatus, PlanType
from .base import AuditMixin, Base, BigIntPK

if TYPE_CHECKING:
    from .table import Table
    from .user import User


class SubscriptionPlan(AuditMixin, Base):
    """A plan a cafe subscribes to. Limits are informational."""

    __tablename__ = "subscription_plan"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    plan_type: Mapped[str] = mapped_column(String(20), default=PlanType.MONTHLY, nullable=False)
    price_cents: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    features: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    max_tables: Mapped[int] = mapped_column(Integer, default=10, nullable=False)
    max_staff: Mapped[int] = mapped_column(Integer, default=5, nullable=False)

    cafes: Mapped[list["Cafe"]] = relationship(back_populates="subscription_plan")

    __table_args__ = (
        CheckConstraint("price_cents >= 0", name="chk_plan_price_non_negative"),
    )


class Cafe(AuditMixin, Base):
    """
    A restaurant/cafe tenant. Tables, menu items, staff and orders all
    belong to exactly one cafe.
    """

    __tablename__ = "cafe"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    logo_url: Mapped[Optional[str]] = mapped_column(Text)
    address: Mapped[Optional[str]] = mapped_column(String(500))
    contact_number: Mapped[Optional[str]] = mapped_column(String(50))
    contact_email: Mapped[Optional[str]] = mapped_column(String(255))
    subscription_plan_id: Mapped[Optional[int]] = mapped_column(
        BigInteger, ForeignKey("subscription_plan.id"), index=True
    )

    # Feature switches
    kitchen_enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    waiter_enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    manager_enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    custom_domain: Mapped[Optional[str]] = mapped_column(String(255))

    status: Mapped[str] = mapped_column(String(20), default=CafeStatus.ACTIVE, nullable=False, index=True)
    payment_status: Mapped[str] = mapped_column(
        String(20), default=CafePaymentStatus.ACTIVE, nullable=False
    )

    subscription_plan: Mapped[Optional["SubscriptionPlan"]] = relationship(back_populates="cafes")
    tables: Mapped[list["Table"]] = relationship(back_populates="cafe")
    staff: Mapped[list["User"]] = relationship(back_populates="cafe")

    def __repr__(self) -> str:
        return f"<Cafe(id={self.id}, name='{self.name}', status='{self.status}')>"
