"""
User model: staff accounts and the platform super admin.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import BigInteger, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import UserStatus
from .base import AuditMixin, Base, BigIntPK

if TYPE_CHECKING:
    from .cafe import Cafe


class User(AuditMixin, Base):
    """
    A person who signs in. Each user has exactly one role; every role except
    SUPER_ADMIN is bound to a cafe.
    """

    __tablename__ = "app_user"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    cafe_id: Mapped[Optional[int]] = mapped_column(BigInteger, ForeignKey("cafe.id"), index=True)
    status: Mapped[str] = mapped_column(String(20), default=UserStatus.ACTIVE, nullable=False)

    cafe: Mapped[Optional["Cafe"]] = relationship(back_populates="staff")

    @property
    def can_login(self) -> bool:
        return self.is_active and self.status == UserStatus.ACTIVE

    def __repr__(self) -> str:
        return f"<User(id={self.id}, role='{self.role}', cafe_id={self.cafe_id})>"
