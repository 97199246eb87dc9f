from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from app.core.db import Base


class TrafficStat(Base):
    """One accounting sample of a customer's traffic, per protocol."""

    __tablename__ = "traffic_stats"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    customer_id: Mapped[int] = mapped_column(Integer, ForeignKey("accounts.id"), index=True, nullable=False)
    recorded_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True, nullable=False)

    web_bytes: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    ftp_bytes: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    smtp_bytes: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    pop3_bytes: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
