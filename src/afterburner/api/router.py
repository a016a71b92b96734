"""Main router aggregation."""

from fastapi import APIRouter

from afterburner.api.admin import router as admin_router
from afterburner.api.apply import router as apply_router
from afterburner.api.auth import router as auth_router
from afterburner.api.medals import router as medals_router
from afterburner.api.site import router as site_router

# Main router; pages are served from the site root
site_routes = APIRouter()

# Include all sub-routers
site_routes.include_router(site_router)
site_routes.include_router(auth_router)
site_routes.include_router(apply_router)
site_routes.include_router(medals_router)
site_routes.include_router(admin_router)
