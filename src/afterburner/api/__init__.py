"""HTML routes."""

from afterburner.api.router import site_routes

__all__ = ["site_routes"]
