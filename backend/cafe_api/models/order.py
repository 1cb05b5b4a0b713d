"""
Order models: Order, OrderLine, OrderPayment.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import OrderStatus
from .base import AuditMixin, Base, BigIntPK, utcnow

if TYPE_CHECKING:
    from .table import Table


class Order(AuditMixin, Base):
    """
    A customer's cart submitted against a table, tracked through its status
    lifecycle. Orders are never deleted; CANCELLED is their soft end.
    Inherits: is_active, created_at, updated_at, deleted_at, *_by_id from AuditMixin.
    """

    __tablename__ = "cafe_order"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    cafe_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("cafe.id"), nullable=False, index=True)
    table_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("dining_table.id"), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(String(20), default=OrderStatus.NEW, nullable=False, index=True)

    subtotal_cents: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    tax_cents: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    total_cents: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    paid_cents: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)

    customer_notes: Mapped[Optional[str]] = mapped_column(Text)

    # Staff who moved the order through the kitchen and delivery steps
    accepted_by_id: Mapped[Optional[int]] = mapped_column(BigInteger, ForeignKey("app_user.id"))
    completed_by_id: Mapped[Optional[int]] = mapped_column(BigInteger, ForeignKey("app_user.id"))
    delivered_by_id: Mapped[Optional[int]] = mapped_column(BigInteger, ForeignKey("app_user.id"))

    table: Mapped["Table"] = relationship(back_populates="orders")
    lines: Mapped[list["OrderLine"]] = relationship(
        back_populates="order", order_by="OrderLine.id", cascade="all, delete-orphan"
    )
    payments: Mapped[list["OrderPayment"]] = relationship(
        back_populates="order", order_by="OrderPayment.id", cascade="all, delete-orphan"
    )

    __table_args__ = (
        CheckConstraint("total_cents = subtotal_cents + tax_cents", name="chk_order_total"),
        CheckConstraint("paid_cents >= 0", name="chk_order_paid_non_negative"),
        # Kitchen/delivery screens filter by cafe and status
        Index("ix_order_cafe_status", "cafe_id", "status"),
    )

    @property
    def table_slug(self) -> str | None:
        return self.table.slug if self.table is not None else None

    @property
    def balance_cents(self) -> int:
        """Amount still owed; 0 once fully paid or overpaid."""
        return max(self.total_cents - self.paid_cents, 0)

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, status='{self.status}', total_cents={self.total_cents})>"


class OrderLine(Base):
    """
    Snapshot of one menu item at order time.
    """

    __tablename__ = "order_line"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    order_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("cafe_order.id"), nullable=False, index=True
    )
    # Kept for reporting; the snapshot fields are authoritative
    menu_item_id: Mapped[Optional[int]] = mapped_column(BigInteger, ForeignKey("menu_item.id"))
    name_snapshot: Mapped[str] = mapped_column(String(200), nullable=False)
    price_snapshot_cents: Mapped[int] = mapped_column(BigInteger, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text)

    order: Mapped["Order"] = relationship(back_populates="lines")

    __table_args__ = (
        CheckConstraint("quantity > 0", name="chk_order_line_quantity_positive"),
        CheckConstraint("price_snapshot_cents >= 0", name="chk_order_line_price_non_negative"),
    )

    @property
    def line_total_cents(self) -> int:
        return self.price_snapshot_cents * self.quantity


class OrderPayment(Base):
    """
    Append-only payment record. Rows are never updated or deleted.
    """

    __tablename__ = "order_payment"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    order_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("cafe_order.id"), nullable=False, index=True
    )
    method: Mapped[str] = mapped_column(String(10), nullable=False)
    amount_cents: Mapped[int] = mapped_column(BigInteger, nullable=False)
    reference: Mapped[Optional[str]] = mapped_column(String(200))
    recorded_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    recorded_by_id: Mapped[Optional[int]] = mapped_column(BigInteger, ForeignKey("app_user.id"))

    order: Mapped["Order"] = relationship(back_populates="payments")

    __table_args__ = (
        CheckConstraint("amount_cents > 0", name="chk_order_payment_amount_positive"),
        CheckConstraint("method IN ('CASH', 'CARD', 'UPI')", name="chk_order_payment_method"),
    )
