from app.models.account import Account, AccountStatus
from app.models.app_setting import AppSetting
from app.models.customer_props import CustomerProps
from app.models.traffic import TrafficStat

__all__ = ["Account", "AccountStatus", "AppSetting", "CustomerProps", "TrafficStat"]
