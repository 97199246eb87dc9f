import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from app.core.config import settings
from app.core.errors import CustomerNotFound, StoreError
from app.api.v1.router import api_router
from app.core.db import AsyncSessionLocal
from app.services.hooks import HookRegistry
from sqlalchemy import text
import redis

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME)
app.state.hooks = HookRegistry()

if settings.cors_origins_list:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(api_router, prefix="/api/v1")


@app.exception_handler(CustomerNotFound)
async def customer_not_found_handler(request: Request, exc: CustomerNotFound):
    logger.error("inconsistent account data path=%s customer_id=%s", request.url.path, exc.customer_id)
    return JSONResponse(
        status_code=500,
        content={"detail": "Account data is inconsistent.", "customer_id": exc.customer_id},
    )


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    logger.error("data store failure path=%s err=%s", request.url.path, str(exc)[:220])
    return JSONResponse(status_code=503, content={"detail": "Data store unavailable."})


@app.get("/api/docs", include_in_schema=False)
async def docs_alias():
    return RedirectResponse(url="/docs")


@app.get("/api/openapi.json", include_in_schema=False)
async def openapi_alias():
    return JSONResponse(app.openapi())

@app.get("/health")
async def health():
    db_ok = False
    redis_ok = False
    try:
        async with AsyncSessionLocal() as s:
            await s.execute(text("SELECT 1"))
        db_ok = True
    except Exception:
        db_ok = False
    try:
        rds = redis.Redis.from_url(settings.REDIS_URL)
        redis_ok = bool(rds.ping())
    except Exception:
        redis_ok = False
    return {"status": "ok" if db_ok and redis_ok else "degraded", "db_ok": db_ok, "redis_ok": redis_ok}
