import pytest

from app.core.security import hash_password
from app.models.account import AccountStatus
from helpers import add_account, auth_headers


@pytest.mark.asyncio
async def test_login_and_me(client, db):
    await add_account(db, "reseller", "reseller", password_hash=hash_password("s3cret-pass"))

    bad = await client.post("/api/v1/auth/login", json={"username": "reseller", "password": "nope"})
    assert bad.status_code == 401

    resp = await client.post("/api/v1/auth/login", json={"username": "reseller", "password": "s3cret-pass"})
    assert resp.status_code == 200
    token = resp.json()["access_token"]

    me = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["role"] == "reseller"


@pytest.mark.asyncio
async def test_role_change_invalidates_token(client, db):
    account = await add_account(db, "reseller", "reseller")
    headers = auth_headers(account)
    account.role = "customer"
    await db.commit()

    resp = await client.get("/api/v1/auth/me", headers=headers)
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_disabled_account_is_forbidden(client, db):
    account = await add_account(db, "reseller", "reseller")
    account.status = AccountStatus.disabled
    await db.commit()

    resp = await client.get("/api/v1/auth/me", headers=auth_headers(account))
    assert resp.status_code == 403
