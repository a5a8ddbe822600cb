"""HTTP API 路由"""

from bizcore.api.catalog import router as catalog_router
from bizcore.api.organization_modules import router as organization_modules_router

__all__ = ["catalog_router", "organization_modules_router"]
