"""Top-level /api router: mounts every endpoint module under its prefix."""

from fastapi import APIRouter
from app.api.endpoints import admin, analytics, auth, bookings, emails, investments, leads, payments

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(leads.router, prefix="/leads", tags=["leads"])
api_router.include_router(investments.router, prefix="/investments", tags=["investments"])
api_router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
api_router.include_router(emails.router, tags=["email"])
api_router.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
api_router.include_router(payments.router, tags=["payments"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
