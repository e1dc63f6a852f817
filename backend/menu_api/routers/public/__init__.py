"""
Public routers - No authentication required.
- / and /health - Service status
- /shared/{shareId} - Menu opened through a share
"""

from .health import router as health_router
from .shared import router as shared_router

__all__ = ["health_router", "shared_router"]
