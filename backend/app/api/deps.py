from fastapi import Depends, HTTPException, status, Request
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.core.security import decode_access_token
from app.core.rbac import Role
from app.models.account import Account, AccountStatus
from app.services.hooks import HookRegistry

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")


async def get_current_principal(
    db: AsyncSession = Depends(get_db),
    token: str = Depends(oauth2_scheme),
) -> tuple[Account, Role]:
    try:
        payload = decode_access_token(token)
        sub: str | None = payload.get("sub")
        token_role: str | None = payload.get("role")
        if not sub or not token_role:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token.")
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token.")

    q = await db.execute(select(Account).where(Account.username == sub))
    account = q.scalar_one_or_none()
    if not account:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Account not found.")

    if account.status == AccountStatus.disabled:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Your account is disabled.")

    # Role is authoritative in the database, the JWT role claim is a cache only.
    try:
        db_role = Role((account.role or "customer").strip().lower())
    except ValueError:
        db_role = Role.customer

    # If role was changed in the DB, old tokens should stop working.
    if token_role != db_role.value:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token.")

    return account, db_role


async def require_admin(principal=Depends(get_current_principal)) -> Account:
    account, role = principal
    if role != Role.admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admins only.")
    return account


async def require_reseller(principal=Depends(get_current_principal)) -> Account:
    account, role = principal
    if role not in (Role.reseller, Role.admin):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied.")
    return account


def get_hooks(request: Request) -> HookRegistry:
    return request.app.state.hooks
