from fastapi import APIRouter
from app.api.v1.routes import (
    auth,
    admin_stats,
    reseller_stats,
    reseller_layout,
)

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])

api_router.include_router(reseller_stats.router, prefix="/reseller/stats", tags=["reseller-stats"])
api_router.include_router(reseller_layout.router, prefix="/reseller/layout", tags=["reseller-layout"])

api_router.include_router(admin_stats.router, prefix="/admin/stats", tags=["admin-stats"])
