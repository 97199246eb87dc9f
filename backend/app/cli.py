import argparse
import asyncio
from sqlalchemy import select
from app.core.db import AsyncSessionLocal
from app.core.rbac import Role
from app.core.security import hash_password
from app.models.account import Account
from app.services.customer_stats import list_customer_rows

async def create_admin(username: str, password: str):
    async with AsyncSessionLocal() as db:
        q = await db.execute(select(Account).where(Account.username == username))
        if q.scalar_one_or_none():
            raise SystemExit("User already exists")
        admin = Account(
            created_by=None,
            username=username,
            password_hash=hash_password(password),
            role=Role.admin.value,
        )
        db.add(admin)
        await db.commit()
        print("Created admin:", username)


def format_stats_line(row) -> str:
    return (
        f"{row.customer_id:>6} {row.customer_name:<32} "
        f"traffic={row.traffic.display_text} ({'-' if row.traffic.percent is None else row.traffic.percent}%) "
        f"disk={row.diskspace.display_text} ({'-' if row.diskspace.percent is None else row.diskspace.percent}%) "
        f"sub={row.subdomain_msg} als={row.alias_msg} mail={row.mail_msg} "
        f"ftp={row.ftp_msg} sql_db={row.sql_db_msg} sql_user={row.sql_user_msg}"
    )


async def print_reseller_stats(reseller_id: int):
    async with AsyncSessionLocal() as db:
        rows = await list_customer_rows(db, reseller_id)
    if not rows:
        print(f"[RESELLER-STATS] reseller_id={reseller_id} has no customers")
        return
    for row in rows:
        print(format_stats_line(row))


def main():
    parser = argparse.ArgumentParser()
    sub = parser.add_subparsers(dest="cmd")

    c = sub.add_parser("create-admin")
    c.add_argument("--username", required=True)
    c.add_argument("--password", required=True)

    r = sub.add_parser("reseller-stats")
    r.add_argument("--reseller-id", type=int, required=True)

    args = parser.parse_args()
    if args.cmd == "create-admin":
        asyncio.run(create_admin(args.username, args.password))
    elif args.cmd == "reseller-stats":
        asyncio.run(print_reseller_stats(args.reseller_id))
    else:
        parser.print_help()

if __name__ == "__main__":
    main()
