"""API routers."""

from api.routers import brands

__all__ = ["brands"]
