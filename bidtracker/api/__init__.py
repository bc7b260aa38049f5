"""API routes."""

from fastapi import APIRouter

from .bids import router as bids_router
from .clients import router as clients_router
from .dashboard import router as dashboard_router
from .financial import router as financial_router
from .health import router as health_router
from .portal import client_router as client_portal_router
from .portal import token_router as portal_router
from .reminders import router as reminders_router
from .settings import router as settings_router

api_router = APIRouter()
api_router.include_router(health_router, tags=["Health"])
api_router.include_router(clients_router, prefix="/clients", tags=["Clients"])
api_router.include_router(bids_router, prefix="/bids", tags=["Bids"])
api_router.include_router(settings_router, prefix="/settings", tags=["Settings"])
api_router.include_router(financial_router, prefix="/financial", tags=["Financial"])
api_router.include_router(dashboard_router, prefix="/dashboard", tags=["Dashboard"])
api_router.include_router(reminders_router, prefix="/reminders", tags=["Reminders"])
api_router.include_router(portal_router, prefix="/portal", tags=["Portal"])
api_router.include_router(client_portal_router, prefix="/client-portal", tags=["Portal"])

__all__ = ["api_router"]
