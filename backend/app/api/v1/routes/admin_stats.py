from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.api.deps import get_hooks, require_admin
from app.api.v1.routes.reseller_stats import row_to_out
from app.schemas.stats import ResellerUserStatsPage
from app.services.customer_stats import list_customer_rows
from app.services.hooks import Events, HookRegistry
from app.services.stats_context import resolve_stats_context

router = APIRouter()


@router.get("/reseller-users", response_model=ResellerUserStatsPage)
async def get_reseller_user_stats(
    reseller_id: int | None = Query(None, ge=1),
    db: AsyncSession = Depends(get_db),
    admin=Depends(require_admin),
    hooks: HookRegistry = Depends(get_hooks),
):
    hooks.dispatch(Events.admin_script_start, account_id=admin.id)

    ctx = await resolve_stats_context(db, admin.id, reseller_id)
    if ctx is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing reseller_id.")

    rows = await list_customer_rows(db, ctx.reseller_id)
    page = ResellerUserStatsPage(reseller_id=ctx.reseller_id, items=[row_to_out(r) for r in rows])

    hooks.dispatch(Events.admin_script_end, account_id=admin.id, page=page)
    return page
