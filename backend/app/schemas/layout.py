from __future__ import annotations

from pydantic import BaseModel, Field


class LayoutOut(BaseModel):
    colors: list[str]
    selected_color: str
    show_main_menu_labels: bool
    logo_url: str
    has_custom_logo: bool


class LayoutColorRequest(BaseModel):
    layout_color: str = Field(min_length=1, max_length=32)


class MenuLabelsRequest(BaseModel):
    show_labels: bool


class LayoutActionResult(BaseModel):
    ok: bool = True
    message: str
    layout: LayoutOut
