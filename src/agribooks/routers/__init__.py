"""API routers.

Includes routes for:
- /api/reminders - reminder CRUD and completion toggle
- /api/alerts - alert listing, lookup, read state and deletion
- /api/categories - category listing and creation
- /api/transactions - transaction writes (fires threshold checks)
- /api/admin/reminders - manual sweep and scheduler status
"""
from agribooks.routers.admin import router as admin_router
from agribooks.routers.alerts import router as alerts_router
from agribooks.routers.categories import router as categories_router
from agribooks.routers.reminders import router as reminders_router
from agribooks.routers.transactions import router as transactions_router

__all__ = [
    "admin_router",
    "alerts_router",
    "categories_router",
    "reminders_router",
    "transactions_router",
]
