from .health import router as health_router
from .ai_search import router as ai_search_router
from .recommendations import router as recommendations_router
from .meals import router as meals_router

__all__ = ["health_router", "ai_search_router", "recommendations_router", "meals_router"]
