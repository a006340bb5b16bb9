from app.routes.auth import router as auth_router
from app.routes.category import router as category_router
from app.routes.post import router as post_router

__all__ = ["auth_router", "category_router", "post_router"]
