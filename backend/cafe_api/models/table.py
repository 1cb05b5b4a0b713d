"""
Table model: a physical table customers order from.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import TableStatus
from shared.config.settings import settings
from .base import AuditMixin, Base, BigIntPK

if TYPE_CHECKING:
    from .cafe import Cafe
    from .order import Order


class Table(AuditMixin, Base):
    """
    The slug is what the table QR code carries; holding it is the only
    credential a customer has.
    """

    __tablename__ = "dining_table"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    cafe_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("cafe.id"), nullable=False, index=True)
    table_number: Mapped[int] = mapped_column(Integer, nullable=False)
    slug: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    capacity: Mapped[int] = mapped_column(Integer, default=4, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default=TableStatus.AVAILABLE, nullable=False)

    cafe: Mapped["Cafe"] = relationship(back_populates="tables")
    orders: Mapped[list["Order"]] = relationship(back_populates="table")

    __table_args__ = (
        UniqueConstraint("cafe_id", "table_number", name="uq_table_cafe_number"),
    )

    @property
    def order_url(self) -> str:
        """Customer page encoded in the QR code."""
        return f"{settings.public_base_url.rstrip('/')}/table/{self.slug}"

    def __repr__(self) -> str:
        return f"<Table(id={self.id}, cafe_id={self.cafe_id}, slug='{self.slug}')>"
