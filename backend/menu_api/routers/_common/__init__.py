"""
Common dependencies shared across routers.
"""

from .dependencies import client_ip, current_principal, menu_principal

__all__ = [
    "client_ip",
    "current_principal",
    "menu_principal",
]
