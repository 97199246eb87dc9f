from __future__ import annotations

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from app.core.db import Base
from app.models.common import TimestampMixin


class AppSetting(Base, TimestampMixin):
    """Small JSON documents keyed by name.

    Keys in use: ``layout:<account_id>`` and ``stats_reseller:<admin_id>``.
    """

    __tablename__ = "app_settings"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
