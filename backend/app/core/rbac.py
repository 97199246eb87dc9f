from __future__ import annotations

import enum


class Role(str, enum.Enum):
    admin = "admin"
    reseller = "reseller"
    customer = "customer"
