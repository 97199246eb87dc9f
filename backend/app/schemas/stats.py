from typing import Optional

from pydantic import BaseModel


class UsageOut(BaseModel):
    used_bytes: int
    limit_bytes: int
    # null when there is no limit
    percent: Optional[int] = None
    display_text: str


class CustomerStatisticsRowOut(BaseModel):
    customer_id: int
    customer_name: str

    traffic: UsageOut
    diskspace: UsageOut

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


class ResellerUserStatsPage(BaseModel):
    reseller_id: int
    items: list[CustomerStatisticsRowOut]
