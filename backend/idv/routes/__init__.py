from idv.routes.auth import router as auth_router
from idv.routes.verification import router as verification_router
from idv.routes.clients import router as clients_router
from idv.routes.products import router as products_router
from idv.routes.reports import router as reports_router, dashboard_router

__all__ = [
    "auth_router", "verification_router", "clients_router", "products_router",
    "reports_router", "dashboard_router",
]
