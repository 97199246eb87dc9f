from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_hooks, require_reseller
from app.core.config import settings
from app.core.db import get_db
from app.models.account import Account
from app.schemas.layout import LayoutActionResult, LayoutColorRequest, LayoutOut, MenuLabelsRequest
from app.services.hooks import Events, HookRegistry
from app.services.layout import (
    LogoError,
    available_colors,
    delete_user_logo,
    get_layout,
    get_user_logo,
    is_user_logo,
    set_layout_color,
    set_main_menu_labels_visibility,
    update_user_logo,
)

router = APIRouter()


async def _layout_out(db: AsyncSession, reseller: Account) -> LayoutOut:
    layout = await get_layout(db, reseller.id)
    # the reseller page never shows a logo inherited from the creator
    logo = await get_user_logo(db, reseller, search_for_creator=False)
    return LayoutOut(
        colors=available_colors(),
        selected_color=layout["color"],
        show_main_menu_labels=layout["show_main_menu_labels"],
        logo_url=logo,
        has_custom_logo=is_user_logo(logo),
    )


@router.get("", response_model=LayoutOut)
async def get_layout_settings(
    db: AsyncSession = Depends(get_db),
    reseller=Depends(require_reseller),
    hooks: HookRegistry = Depends(get_hooks),
):
    hooks.dispatch(Events.reseller_script_start, account_id=reseller.id)
    out = await _layout_out(db, reseller)
    hooks.dispatch(Events.reseller_script_end, account_id=reseller.id, page=out)
    return out


@router.post("/color", response_model=LayoutActionResult)
async def change_layout_color(
    payload: LayoutColorRequest,
    db: AsyncSession = Depends(get_db),
    reseller=Depends(require_reseller),
    hooks: HookRegistry = Depends(get_hooks),
):
    hooks.dispatch(Events.reseller_script_start, account_id=reseller.id)
    if not await set_layout_color(db, reseller.id, payload.layout_color):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unknown layout color.")
    result = LayoutActionResult(message="Layout color successfully updated.", layout=await _layout_out(db, reseller))
    hooks.dispatch(Events.reseller_script_end, account_id=reseller.id, page=result)
    return result


@router.post("/menu-labels", response_model=LayoutActionResult)
async def change_menu_labels(
    payload: MenuLabelsRequest,
    db: AsyncSession = Depends(get_db),
    reseller=Depends(require_reseller),
    hooks: HookRegistry = Depends(get_hooks),
):
    hooks.dispatch(Events.reseller_script_start, account_id=reseller.id)
    await set_main_menu_labels_visibility(db, reseller.id, payload.show_labels)
    result = LayoutActionResult(
        message="Main menu labels visibility successfully updated.",
        layout=await _layout_out(db, reseller),
    )
    hooks.dispatch(Events.reseller_script_end, account_id=reseller.id, page=result)
    return result


@router.post("/logo", response_model=LayoutActionResult)
async def upload_logo(
    logo_file: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
    reseller=Depends(require_reseller),
    hooks: HookRegistry = Depends(get_hooks),
):
    hooks.dispatch(Events.reseller_script_start, account_id=reseller.id)
    # read one byte past the cap so oversized uploads are detected without buffering them whole
    content = await logo_file.read(settings.LOGO_MAX_BYTES + 1)
    try:
        await update_user_logo(db, reseller.id, content, logo_file.content_type)
    except LogoError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    result = LayoutActionResult(message="Logo successfully updated.", layout=await _layout_out(db, reseller))
    hooks.dispatch(Events.reseller_script_end, account_id=reseller.id, page=result)
    return result


@router.delete("/logo", response_model=LayoutActionResult)
async def remove_logo(
    db: AsyncSession = Depends(get_db),
    reseller=Depends(require_reseller),
    hooks: HookRegistry = Depends(get_hooks),
):
    hooks.dispatch(Events.reseller_script_start, account_id=reseller.id)
    if not await delete_user_logo(db, reseller.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No custom logo to remove.")
    result = LayoutActionResult(message="Logo successfully removed.", layout=await _layout_out(db, reseller))
    hooks.dispatch(Events.reseller_script_end, account_id=reseller.id, page=result)
    return result
