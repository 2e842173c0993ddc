"""Recipe Finder API - FastAPI Application."""

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from recipe_finder.config import get_settings

settings = get_settings()

# Initialize Sentry for error monitoring
if settings.sentry_dsn:
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.environment,
        # Performance monitoring (20% sample - cost-effective for production)
        traces_sample_rate=0.2,
        # Don't send PII (client IPs are used for geolocation)
        send_default_pii=False,
    )
    print(f"📊 Sentry initialized for {settings.environment}")
else:
    print("📊 Sentry not configured (no SENTRY_DSN)")

from recipe_finder.routers import health_router, ai_search_router, recommendations_router, meals_router
from recipe_finder.services.mealdb import get_mealdb_client
from recipe_finder.services.geolocation import get_geolocation_service
from recipe_finder.services.openai_client import get_openai_service

# Create FastAPI app
app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    description="Find recipes by category, name or craving, with an AI assistant on top of TheMealDB",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health_router)
app.include_router(ai_search_router)
app.include_router(recommendations_router)
app.include_router(meals_router)


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": settings.api_title,
        "version": settings.api_version,
        "docs": "/docs",
        "health": "/health",
    }


# Startup/shutdown events
@app.on_event("startup")
async def startup():
    """Run on application startup."""
    print(f"🚀 {settings.api_title} v{settings.api_version}")
    print(f"📍 Environment: {settings.environment}")
    print(f"🤖 AI search: {'enabled' if settings.ai_configured else 'disabled (no OPENAI_API_KEY)'}")
    print(f"📚 Docs: http://localhost:8000/docs")


@app.on_event("shutdown")
async def shutdown():
    """Close shared HTTP clients that were opened."""
    if get_mealdb_client.cache_info().currsize:
        await get_mealdb_client().aclose()
    if get_geolocation_service.cache_info().currsize:
        await get_geolocation_service().aclose()
    if get_openai_service.cache_info().currsize and get_openai_service() is not None:
        await get_openai_service().client.close()
    print("👋 Shutting down Recipe Finder API")
