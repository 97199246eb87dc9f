from __future__ import annotations

import hashlib
import logging
from pathlib import Path

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.rbac import Role
from app.models.account import Account
from app.models.app_setting import AppSetting

logger = logging.getLogger(__name__)

LOGO_EXTENSIONS = {
    "image/gif": "gif",
    "image/jpeg": "jpg",
    "image/pjpeg": "jpg",
    "image/png": "png",
}


class LogoError(ValueError):
    pass


def layout_key(account_id: int) -> str:
    return f"layout:{int(account_id)}"


def available_colors() -> list[str]:
    return settings.layout_colors_list


def base_layout() -> dict:
    return {
        "color": settings.DEFAULT_LAYOUT_COLOR,
        "show_main_menu_labels": True,
        "logo": "",
    }


def normalize_layout(raw: dict | None) -> dict:
    out = base_layout()
    if not isinstance(raw, dict):
        return out

    color = str(raw.get("color") or "").strip()
    if color in available_colors():
        out["color"] = color
    out["show_main_menu_labels"] = bool(raw.get("show_main_menu_labels", True))

    logo = str(raw.get("logo") or "").strip()
    # file names only, never paths
    if logo and "/" not in logo and "\\" not in logo:
        out["logo"] = logo[:64]
    return out


async def _get_row(db: AsyncSession, account_id: int) -> AppSetting | None:
    q = await db.execute(select(AppSetting).where(AppSetting.key == layout_key(account_id)))
    return q.scalar_one_or_none()


async def get_layout(db: AsyncSession, account_id: int) -> dict:
    row = await _get_row(db, account_id)
    return normalize_layout(row.value if row else None)


async def _save_layout(db: AsyncSession, account_id: int, layout: dict) -> dict:
    normalized = normalize_layout(layout)
    row = await _get_row(db, account_id)
    if row:
        row.value = normalized
    else:
        db.add(AppSetting(key=layout_key(account_id), value=normalized))
    await db.commit()
    return normalized


async def set_layout_color(db: AsyncSession, account_id: int, color: str) -> bool:
    """Returns False when the color is not part of the available set."""
    if color not in available_colors():
        return False
    layout = await get_layout(db, account_id)
    layout["color"] = color
    await _save_layout(db, account_id, layout)
    return True


async def set_main_menu_labels_visibility(db: AsyncSession, account_id: int, visible: bool) -> None:
    layout = await get_layout(db, account_id)
    layout["show_main_menu_labels"] = bool(visible)
    await _save_layout(db, account_id, layout)


def logo_url(filename: str) -> str:
    return settings.LOGO_URL_PREFIX.rstrip("/") + "/" + filename


async def get_user_logo(db: AsyncSession, account: Account, search_for_creator: bool = True) -> str:
    """URL of the account's logo.

    Customers inherit their reseller's logo when `search_for_creator` is set.
    Falls back to the default logo.
    """
    layout = await get_layout(db, account.id)
    if layout["logo"]:
        return logo_url(layout["logo"])

    if search_for_creator and account.role == Role.customer.value and account.created_by:
        creator_layout = await get_layout(db, account.created_by)
        if creator_layout["logo"]:
            return logo_url(creator_layout["logo"])

    return settings.DEFAULT_LOGO_URL


def is_user_logo(url: str) -> bool:
    return url != settings.DEFAULT_LOGO_URL


def _remove_logo_file(filename: str) -> None:
    if not filename:
        return
    path = Path(settings.LOGO_DIR) / filename
    path.unlink(missing_ok=True)
    logger.info("layout logo removed file=%s", filename)


async def update_user_logo(db: AsyncSession, account_id: int, content: bytes, content_type: str | None) -> str:
    ext = LOGO_EXTENSIONS.get((content_type or "").lower())
    if not ext:
        raise LogoError("You can only upload images.")
    if not content:
        raise LogoError("Logo file is empty.")
    if len(content) > settings.LOGO_MAX_BYTES:
        raise LogoError("Logo file is too big.")

    # per account, so replacing or deleting never touches another account's file
    filename = f"{int(account_id)}-{hashlib.sha1(content).hexdigest()}.{ext}"
    logo_dir = Path(settings.LOGO_DIR)
    logo_dir.mkdir(parents=True, exist_ok=True)
    (logo_dir / filename).write_bytes(content)

    layout = await get_layout(db, account_id)
    previous = layout["logo"]
    layout["logo"] = filename
    await _save_layout(db, account_id, layout)

    if previous and previous != filename:
        _remove_logo_file(previous)
    logger.info("layout logo updated account_id=%s file=%s", account_id, filename)
    return filename


async def delete_user_logo(db: AsyncSession, account_id: int) -> bool:
    """Returns False when the account had no custom logo."""
    layout = await get_layout(db, account_id)
    previous = layout["logo"]
    if not previous:
        return False
    layout["logo"] = ""
    await _save_layout(db, account_id, layout)
    _remove_logo_file(previous)
    return True
