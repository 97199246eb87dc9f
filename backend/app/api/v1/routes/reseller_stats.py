from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.api.deps import get_hooks, require_reseller
from app.schemas.stats import CustomerStatisticsRowOut, ResellerUserStatsPage, UsageOut
from app.services.customer_stats import CustomerStatisticsRow, list_customer_rows
from app.services.hooks import Events, HookRegistry
from app.services.usage_format import UsageDisplay

router = APIRouter()


def _usage_out(u: UsageDisplay) -> UsageOut:
    return UsageOut(
        used_bytes=u.used_bytes,
        limit_bytes=u.limit_bytes,
        percent=u.percent,
        display_text=u.display_text,
    )


def row_to_out(r: CustomerStatisticsRow) -> CustomerStatisticsRowOut:
    return CustomerStatisticsRowOut(
        customer_id=r.customer_id,
        customer_name=r.customer_name,
        traffic=_usage_out(r.traffic),
        diskspace=_usage_out(r.diskspace),
        web=r.web,
        ftp=r.ftp,
        smtp=r.smtp,
        pop3=r.pop3,
        subdomain_msg=r.subdomain_msg,
        alias_msg=r.alias_msg,
        mail_msg=r.mail_msg,
        ftp_msg=r.ftp_msg,
        sql_db_msg=r.sql_db_msg,
        sql_user_msg=r.sql_user_msg,
    )


@router.get("/users", response_model=ResellerUserStatsPage)
async def get_own_user_stats(
    db: AsyncSession = Depends(get_db),
    reseller=Depends(require_reseller),
    hooks: HookRegistry = Depends(get_hooks),
):
    hooks.dispatch(Events.reseller_script_start, account_id=reseller.id)

    rows = await list_customer_rows(db, reseller.id)
    page = ResellerUserStatsPage(reseller_id=reseller.id, items=[row_to_out(r) for r in rows])

    hooks.dispatch(Events.reseller_script_end, account_id=reseller.id, page=page)
    return page
