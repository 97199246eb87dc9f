from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import StoreError
from app.models.app_setting import AppSetting


@dataclass(frozen=True)
class StatsContext:
    """Which reseller an admin's statistics request targets."""

    admin_id: int
    reseller_id: int


def remembered_reseller_key(admin_id: int) -> str:
    return f"stats_reseller:{int(admin_id)}"


async def get_remembered_reseller(db: AsyncSession, admin_id: int) -> int | None:
    q = await db.execute(select(AppSetting).where(AppSetting.key == remembered_reseller_key(admin_id)))
    row = q.scalar_one_or_none()
    if not row or not isinstance(row.value, dict):
        return None
    try:
        reseller_id = int(row.value.get("reseller_id"))
    except (TypeError, ValueError):
        return None
    return reseller_id if reseller_id > 0 else None


async def remember_reseller(db: AsyncSession, admin_id: int, reseller_id: int) -> None:
    key = remembered_reseller_key(admin_id)
    q = await db.execute(select(AppSetting).where(AppSetting.key == key))
    row = q.scalar_one_or_none()
    if row:
        row.value = {"reseller_id": int(reseller_id)}
    else:
        db.add(AppSetting(key=key, value={"reseller_id": int(reseller_id)}))
    await db.commit()


async def resolve_stats_context(db: AsyncSession, admin_id: int, reseller_id: int | None) -> StatsContext | None:
    """An explicit reseller id wins and is remembered; otherwise fall back to the remembered one."""
    try:
        if reseller_id is not None:
            await remember_reseller(db, admin_id, reseller_id)
            return StatsContext(admin_id=admin_id, reseller_id=reseller_id)
        remembered = await get_remembered_reseller(db, admin_id)
    except SQLAlchemyError as e:
        raise StoreError(str(e)) from e
    if remembered is None:
        return None
    return StatsContext(admin_id=admin_id, reseller_id=remembered)
