"""
Menu API main application.
Entry point for the FastAPI REST server.
"""

from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from shared.config.settings import settings
from shared.security.rate_limit import limiter, rate_limit_exceeded_handler
from menu_api.core import (
    configure_cors,
    lifespan,
    register_exception_handlers,
    register_middlewares,
)
from menu_api.routers import (
    auth_router,
    family_router,
    health_router,
    menus_router,
    recipes_router,
    shared_router,
)


app = FastAPI(
    title="Menu Planner API",
    description="Family recipes, dated menus and menu sharing",
    version=settings.app_version,
    lifespan=lifespan,
)

# Rate limiting: default limit per client address on every route
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

register_middlewares(app)
configure_cors(app)
register_exception_handlers(app)

app.include_router(health_router)
app.include_router(auth_router)
app.include_router(family_router)
app.include_router(recipes_router)
app.include_router(menus_router)
app.include_router(shared_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "menu_api.main:app",
        host="0.0.0.0",
        port=settings.api_port,
        reload=settings.debug,
    )
