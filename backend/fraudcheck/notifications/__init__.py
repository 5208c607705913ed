"""Notifications addressed to users."""
from .router import router as notifications_router

__all__ = ['notifications_router']
