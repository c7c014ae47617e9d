from portfolio.api.routes.auth import router as auth_router
from portfolio.api.routes.contact import router as contact_router
from portfolio.api.routes.content import router as content_router
from portfolio.api.routes.health import router as health_router
from portfolio.api.routes.skills import router as skills_router
from portfolio.api.routes.uploads import router as uploads_router

__all__ = [
    "auth_router",
    "contact_router",
    "content_router",
    "health_router",
    "skills_router",
    "uploads_router",
]
