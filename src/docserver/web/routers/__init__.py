from docserver.web.routers.auth import router as auth_router
from docserver.web.routers.docs import router as docs_router

__all__ = [
    "auth_router",
    "docs_router",
]
