"""
Family group routers - /family/*
"""

from .routes import router

__all__ = ["router"]
