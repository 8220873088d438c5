# backend/api/__init__.py
"""
集中所有 REST router（全部掛在 /api 下）
"""
from fastapi import APIRouter

from .auth           import router as auth_router
from .installations  import router as installations_router
from .parts          import router as parts_router
from .reports        import router as reports_router
from .dashboard      import router as dashboard_router
from .qr_codes       import router as qr_router
from .inventory      import router as inventory_router

api_router = APIRouter(prefix="/api")

api_router.include_router(auth_router)
api_router.include_router(installations_router)
api_router.include_router(parts_router)
api_router.include_router(reports_router)
api_router.include_router(dashboard_router)
api_router.include_router(qr_router)
api_router.include_router(inventory_router)
