from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import OperationalError

from app.core.errors import CustomerNotFound, StoreError
from app.services import customer_stats
from app.services.customer_stats import (
    build_row,
    decode_idna,
    get_customer_limits,
    get_customer_stats,
    list_customer_rows,
    month_bounds,
)
from helpers import add_account, add_customer, add_traffic

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_end_to_end_row(db):
    reseller = await add_account(db, "reseller10", "reseller", account_id=10)
    customer = await add_customer(
        db,
        reseller,
        "example.com",
        account_id=55,
        subdomain_current=3,
        subdomain_max=10,
        traffic_limit_mib=2,
        diskspace_limit_mib=1,
        diskspace_used_bytes=2097152,
    )
    await add_traffic(db, customer, datetime(2026, 10, 5, tzinfo=timezone.utc), web=524288, smtp=524288)

    rows = await list_customer_rows(db, 10, now=NOW)

    assert len(rows) == 1
    row = rows[0]
    assert row.customer_id == 55
    assert row.customer_name == "example.com"
    assert row.traffic.display_text == "1.00 MiB / 2.00 MiB"
    assert row.traffic.percent == 50
    assert row.diskspace.display_text == "2.00 MiB / 1.00 MiB"
    assert row.diskspace.percent == 200
    assert row.subdomain_msg == "3 / 10"
    assert row.web == "512.00 KiB"
    assert row.smtp == "512.00 KiB"
    assert row.ftp == "0.00 B"


@pytest.mark.asyncio
async def test_traffic_only_counts_current_month(db):
    reseller = await add_account(db, "r1", "reseller")
    customer = await add_customer(db, reseller, "c1")
    await add_traffic(db, customer, datetime(2026, 9, 30, 23, 59, tzinfo=timezone.utc), web=999)
    await add_traffic(db, customer, datetime(2026, 10, 1, tzinfo=timezone.utc), web=100, ftp=10)
    await add_traffic(db, customer, datetime(2026, 10, 18, tzinfo=timezone.utc), pop3=5, smtp=1)
    await add_traffic(db, customer, datetime(2026, 11, 1, tzinfo=timezone.utc), web=777)

    snap = await get_customer_stats(db, customer.id, now=NOW)

    assert snap.web_traffic_bytes == 100
    assert snap.ftp_traffic_bytes == 10
    assert snap.smtp_traffic_bytes == 1
    assert snap.pop3_traffic_bytes == 5
    assert snap.total_traffic_bytes == 116


@pytest.mark.asyncio
async def test_unlimited_and_disabled_limits(db):
    reseller = await add_account(db, "r1", "reseller")
    customer = await add_customer(db, reseller, "c1", mail_current=4, mail_max=0, ftp_max=-1, diskspace_used_bytes=10)

    row = await build_row(db, customer.id, now=NOW)

    assert row.mail_msg == "4 / ∞"
    assert row.ftp_msg == "0 / Disabled"
    assert row.traffic.percent is None
    assert row.traffic.display_text == "0.00 B / ∞"
    assert row.diskspace.percent is None
    assert row.diskspace.display_text == "10.00 B / ∞"


@pytest.mark.asyncio
async def test_limits_convert_mebibytes(db):
    reseller = await add_account(db, "r1", "reseller")
    customer = await add_customer(db, reseller, "c1", traffic_limit_mib=1, diskspace_limit_mib=3)

    limits = await get_customer_limits(db, customer.id)

    assert limits.traffic_limit_bytes == 1048576
    assert limits.diskspace_limit_bytes == 3 * 1048576


@pytest.mark.asyncio
async def test_reseller_without_customers_gets_empty_list(db):
    reseller = await add_account(db, "lonely", "reseller")
    assert await list_customer_rows(db, reseller.id, now=NOW) == []
    # unknown reseller ids behave the same
    assert await list_customer_rows(db, 9999, now=NOW) == []


@pytest.mark.asyncio
async def test_rows_follow_ascending_customer_id(db):
    reseller = await add_account(db, "r1", "reseller", account_id=1)
    other = await add_account(db, "r2", "reseller", account_id=2)
    await add_customer(db, reseller, "seven.example", account_id=7)
    await add_customer(db, reseller, "three.example", account_id=3)
    await add_customer(db, other, "foreign.example", account_id=5)

    rows = await list_customer_rows(db, reseller.id, now=NOW)

    assert [r.customer_id for r in rows] == [3, 7]
    assert [r.customer_name for r in rows] == ["three.example", "seven.example"]


@pytest.mark.asyncio
async def test_missing_customer_raises_not_found(db):
    with pytest.raises(CustomerNotFound) as exc:
        await build_row(db, 404, now=NOW)
    assert exc.value.customer_id == 404


@pytest.mark.asyncio
async def test_customer_without_props_fails_whole_page(db):
    reseller = await add_account(db, "r1", "reseller")
    await add_customer(db, reseller, "ok.example")
    broken = await add_account(db, "broken.example", "customer", created_by=reseller.id)

    with pytest.raises(CustomerNotFound) as exc:
        await list_customer_rows(db, reseller.id, now=NOW)
    assert exc.value.customer_id == broken.id


@pytest.mark.asyncio
async def test_store_failure_is_wrapped(db, monkeypatch):
    async def boom(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection lost"))

    monkeypatch.setattr(customer_stats, "owned_customer_ids", boom)

    with pytest.raises(StoreError):
        await list_customer_rows(db, 1, now=NOW)


def test_decode_idna():
    assert decode_idna("xn--bcher-kva.example") == "bücher.example"
    assert decode_idna("plain.example") == "plain.example"
    assert decode_idna("bücher.example") == "bücher.example"


def test_month_bounds_wraps_year():
    start, end = month_bounds(datetime(2026, 12, 31, 23, 0, tzinfo=timezone.utc))
    assert start == datetime(2026, 12, 1, tzinfo=timezone.utc)
    assert end == datetime(2027, 1, 1, tzinfo=timezone.utc)
