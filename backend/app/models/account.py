from __future__ import annotations

import enum

from sqlalchemy import Enum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.core.db import Base
from app.models.common import TimestampMixin


class AccountStatus(str, enum.Enum):
    active = "active"
    disabled = "disabled"


class Account(Base, TimestampMixin):
    """Admin, reseller and customer accounts share one table.

    `created_by` is the ownership relation: a reseller owns the customers it
    created, an admin owns the resellers it created.
    """

    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    created_by: Mapped[int | None] = mapped_column(Integer, ForeignKey("accounts.id"), index=True, nullable=True)

    username: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    role: Mapped[str] = mapped_column(String(16), default="customer", nullable=False)  # admin|reseller|customer
    status: Mapped[AccountStatus] = mapped_column(Enum(AccountStatus), default=AccountStatus.active, nullable=False)
