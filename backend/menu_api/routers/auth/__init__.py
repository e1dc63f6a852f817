"""
Authentication routers - /auth/*
Handles registration, login and the caller's profile.
"""

from .routes import router

__all__ = ["router"]
