from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.core.db import get_db
from app.core.security import verify_password, create_access_token, hash_password
from app.schemas.auth import LoginRequest, TokenResponse, ChangePasswordRequest
from app.models.account import Account, AccountStatus
from app.api.deps import get_current_principal

router = APIRouter()

@router.post("/login", response_model=TokenResponse)
async def login(payload: LoginRequest, db: AsyncSession = Depends(get_db)):
    q = await db.execute(select(Account).where(Account.username == payload.username))
    account = q.scalar_one_or_none()
    if not account or not verify_password(payload.password, account.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Bad username or password.")

    if account.status == AccountStatus.disabled:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Your account is disabled.")

    role = (account.role or "customer").strip().lower()
    token = create_access_token(subject=account.username, role=role)
    return TokenResponse(access_token=token)

@router.get("/me")
async def me(principal=Depends(get_current_principal)):
    account, role = principal
    return {
        "username": account.username,
        "role": role.value,
        "account_id": account.id,
        "created_by": account.created_by,
        "status": account.status.value,
    }


@router.post("/change-password")
async def change_password(
    payload: ChangePasswordRequest,
    db: AsyncSession = Depends(get_db),
    principal=Depends(get_current_principal),
):
    account, _role = principal

    if not verify_password(payload.current_password, account.password_hash):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Current password is wrong.")

    new_password = (payload.new_password or "").strip()
    if len(new_password) < 8:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="New password must have at least 8 characters.")
    if verify_password(new_password, account.password_hash):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="New password must differ from the current one.")

    account.password_hash = hash_password(new_password)
    await db.commit()
    return {"ok": True}
