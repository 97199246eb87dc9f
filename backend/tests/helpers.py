from datetime import datetime

from app.core.security import create_access_token
from app.models.account import Account
from app.models.customer_props import CustomerProps
from app.models.traffic import TrafficStat


async def add_account(db, username, role, created_by=None, account_id=None, password_hash="x"):
    account = Account(
        id=account_id,
        username=username,
        password_hash=password_hash,
        role=role,
        created_by=created_by,
    )
    db.add(account)
    await db.commit()
    await db.refresh(account)
    return account


async def add_customer(db, reseller, username, account_id=None, **props):
    customer = await add_account(db, username, "customer", created_by=reseller.id, account_id=account_id)
    db.add(CustomerProps(customer_id=customer.id, **props))
    await db.commit()
    return customer


async def add_traffic(db, customer, recorded_at: datetime, web=0, ftp=0, smtp=0, pop3=0):
    db.add(
        TrafficStat(
            customer_id=customer.id,
            recorded_at=recorded_at,
            web_bytes=web,
            ftp_bytes=ftp,
            smtp_bytes=smtp,
            pop3_bytes=pop3,
        )
    )
    await db.commit()


def auth_headers(account) -> dict:
    token = create_access_token(subject=account.username, role=account.role)
    return {"Authorization": f"Bearer {token}"}
