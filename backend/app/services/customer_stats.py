from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import CustomerNotFound, StoreError
from app.core.rbac import Role
from app.models.account import Account
from app.models.customer_props import CustomerProps
from app.models.traffic import TrafficStat
from app.services.usage_format import (
    UsageDisplay,
    bytes_human,
    format_usage,
    limit_message,
    mib_to_bytes,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CustomerUsageSnapshot:
    customer_id: int
    display_name: str
    web_traffic_bytes: int
    ftp_traffic_bytes: int
    smtp_traffic_bytes: int
    pop3_traffic_bytes: int
    total_traffic_bytes: int
    diskspace_used_bytes: int


@dataclass(frozen=True)
class CustomerLimits:
    subdomain_current: int
    subdomain_max: int
    alias_current: int
    alias_max: int
    mail_current: int
    mail_max: int
    ftp_current: int
    ftp_max: int
    sql_db_current: int
    sql_db_max: int
    sql_user_current: int
    sql_user_max: int
    traffic_limit_mib: int
    diskspace_limit_mib: int

    @property
    def traffic_limit_bytes(self) -> int:
        return mib_to_bytes(self.traffic_limit_mib)

    @property
    def diskspace_limit_bytes(self) -> int:
        return mib_to_bytes(self.diskspace_limit_mib)


@dataclass(frozen=True)
class CustomerStatisticsRow:
    customer_id: int
    customer_name: str
    traffic: UsageDisplay
    diskspace: UsageDisplay
    web: str
    ftp: str
    smtp: str
    pop3: str
    subdomain_msg: str
    alias_msg: str
    mail_msg: str
    ftp_msg: str
    sql_db_msg: str
    sql_user_msg: str


def decode_idna(name: str) -> str:
    """Turn punycode labels (xn--...) back into Unicode, leave anything else as is."""
    try:
        return name.encode("ascii").decode("idna")
    except UnicodeError:
        return name


def month_bounds(now: datetime) -> tuple[datetime, datetime]:
    """[first day of the month, first day of the next month) in UTC."""
    now = now.astimezone(timezone.utc)
    start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end


async def _get_customer(db: AsyncSession, customer_id: int) -> Account:
    q = await db.execute(
        select(Account).where(Account.id == customer_id, Account.role == Role.customer.value)
    )
    customer = q.scalar_one_or_none()
    if not customer:
        raise CustomerNotFound(customer_id)
    return customer


async def get_customer_stats(
    db: AsyncSession, customer_id: int, now: datetime | None = None
) -> CustomerUsageSnapshot:
    customer = await _get_customer(db, customer_id)
    start, end = month_bounds(now or datetime.now(timezone.utc))

    tq = await db.execute(
        select(
            func.coalesce(func.sum(TrafficStat.web_bytes), 0).label("web"),
            func.coalesce(func.sum(TrafficStat.ftp_bytes), 0).label("ftp"),
            func.coalesce(func.sum(TrafficStat.smtp_bytes), 0).label("smtp"),
            func.coalesce(func.sum(TrafficStat.pop3_bytes), 0).label("pop3"),
        ).where(
            TrafficStat.customer_id == customer_id,
            TrafficStat.recorded_at >= start,
            TrafficStat.recorded_at < end,
        )
    )
    trow = tq.one()
    web, ftp, smtp, pop3 = int(trow.web or 0), int(trow.ftp or 0), int(trow.smtp or 0), int(trow.pop3 or 0)

    dq = await db.execute(
        select(CustomerProps.diskspace_used_bytes).where(CustomerProps.customer_id == customer_id)
    )
    disk_used = dq.scalar_one_or_none()
    if disk_used is None:
        raise CustomerNotFound(customer_id)

    return CustomerUsageSnapshot(
        customer_id=customer.id,
        display_name=decode_idna(customer.username),
        web_traffic_bytes=web,
        ftp_traffic_bytes=ftp,
        smtp_traffic_bytes=smtp,
        pop3_traffic_bytes=pop3,
        total_traffic_bytes=web + ftp + smtp + pop3,
        diskspace_used_bytes=int(disk_used),
    )


async def get_customer_limits(db: AsyncSession, customer_id: int) -> CustomerLimits:
    q = await db.execute(select(CustomerProps).where(CustomerProps.customer_id == customer_id))
    p = q.scalar_one_or_none()
    if not p:
        raise CustomerNotFound(customer_id)
    return CustomerLimits(
        subdomain_current=p.subdomain_current,
        subdomain_max=p.subdomain_max,
        alias_current=p.alias_current,
        alias_max=p.alias_max,
        mail_current=p.mail_current,
        mail_max=p.mail_max,
        ftp_current=p.ftp_current,
        ftp_max=p.ftp_max,
        sql_db_current=p.sql_db_current,
        sql_db_max=p.sql_db_max,
        sql_user_current=p.sql_user_current,
        sql_user_max=p.sql_user_max,
        traffic_limit_mib=p.traffic_limit_mib,
        diskspace_limit_mib=p.diskspace_limit_mib,
    )


def make_row(usage: CustomerUsageSnapshot, limits: CustomerLimits) -> CustomerStatisticsRow:
    return CustomerStatisticsRow(
        customer_id=usage.customer_id,
        customer_name=usage.display_name,
        traffic=format_usage(usage.total_traffic_bytes, limits.traffic_limit_bytes),
        diskspace=format_usage(usage.diskspace_used_bytes, limits.diskspace_limit_bytes),
        web=bytes_human(usage.web_traffic_bytes),
        ftp=bytes_human(usage.ftp_traffic_bytes),
        smtp=bytes_human(usage.smtp_traffic_bytes),
        pop3=bytes_human(usage.pop3_traffic_bytes),
        subdomain_msg=limit_message(limits.subdomain_current, limits.subdomain_max),
        alias_msg=limit_message(limits.alias_current, limits.alias_max),
        mail_msg=limit_message(limits.mail_current, limits.mail_max),
        ftp_msg=limit_message(limits.ftp_current, limits.ftp_max),
        sql_db_msg=limit_message(limits.sql_db_current, limits.sql_db_max),
        sql_user_msg=limit_message(limits.sql_user_current, limits.sql_user_max),
    )


async def build_row(db: AsyncSession, customer_id: int, now: datetime | None = None) -> CustomerStatisticsRow:
    usage = await get_customer_stats(db, customer_id, now)
    limits = await get_customer_limits(db, customer_id)
    return make_row(usage, limits)


async def owned_customer_ids(db: AsyncSession, reseller_id: int) -> list[int]:
    q = await db.execute(
        select(Account.id)
        .where(Account.created_by == reseller_id, Account.role == Role.customer.value)
        .order_by(Account.id.asc())
    )
    return [int(x) for x in q.scalars().all()]


async def list_customer_rows(
    db: AsyncSession, reseller_id: int, now: datetime | None = None
) -> list[CustomerStatisticsRow]:
    """One statistics row per customer owned by the reseller, ascending customer id.

    CustomerNotFound is not caught: a missing account here means the
    ownership query and the account tables disagree.
    """
    now = now or datetime.now(timezone.utc)
    try:
        ids = await owned_customer_ids(db, reseller_id)
        rows = [await build_row(db, cid, now) for cid in ids]
    except CustomerNotFound:
        logger.error("reseller_user_stats inconsistent ownership reseller_id=%s", reseller_id)
        raise
    except SQLAlchemyError as e:
        logger.warning("reseller_user_stats store failure reseller_id=%s err=%s", reseller_id, str(e)[:220])
        raise StoreError(str(e)) from e
    return rows
