from __future__ import annotations

from sqlalchemy import BigInteger, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from app.core.db import Base
from app.models.common import TimestampMixin


class CustomerProps(Base, TimestampMixin):
    """Resource counters and limits of a customer.

    For every `*_max` column 0 means unlimited and -1 means disabled.
    """

    __tablename__ = "customer_props"

    customer_id: Mapped[int] = mapped_column(Integer, ForeignKey("accounts.id"), primary_key=True)

    subdomain_current: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    subdomain_max: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    alias_current: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    alias_max: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    mail_current: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    mail_max: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    ftp_current: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    ftp_max: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    sql_db_current: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    sql_db_max: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    sql_user_current: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    sql_user_max: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # limits are configured in MiB
    traffic_limit_mib: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    diskspace_limit_mib: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # refreshed by the disk accounting job
    diskspace_used_bytes: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
