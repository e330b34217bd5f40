import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.core.error_handlers import register_exception_handlers
from app.core.logging import configure_logging

# IMPORT ROUTERS
from app.routers.health import router as health_router
from app.routers.auth import router as auth_router
from app.routers.questionnaire import router as questionnaire_router
from app.routers.assessments import router as assessments_router

configure_logging(settings)
logger = logging.getLogger(__name__)


# SWAGGER UI - tag display order
_OPENAPI_TAGS = [
    {"name": "Root"},
    {"name": "Health"},
    {"name": "Auth"},
    {"name": "Questionnaire"},
    {"name": "Assessments"},
]

# FASTAPI APPLICATION CONFIGURATION
app = FastAPI(
    title=f"{settings.APP_NAME} API",
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=_OPENAPI_TAGS,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    expose_headers=["Content-Length"],
    max_age=settings.CORS_MAX_AGE,
)


# REQUEST LOGGING
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)")
    return response


# REGISTER EXCEPTION HANDLERS
register_exception_handlers(app)

# REGISTER ROUTERS (order matches _OPENAPI_TAGS / Swagger UI display order)
app.include_router(health_router, prefix=settings.API_V1_PREFIX)         # Health
app.include_router(auth_router, prefix=settings.API_V1_PREFIX)           # Auth
app.include_router(questionnaire_router, prefix=settings.API_V1_PREFIX)  # Questionnaire
app.include_router(assessments_router, prefix=settings.API_V1_PREFIX)    # Assessments


# ROOT ENDPOINT
@app.get("/", tags=["Root"], summary="Root endpoint")
async def root():
    return {
        "service": f"{settings.APP_NAME} API",
        "version": settings.APP_VERSION,
        "api": settings.API_V1_PREFIX,
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc"
        },
        "status": "running"
    }


# STARTUP EVENT
@app.on_event("startup")
async def startup_event():
    logger.info(f"Starting {settings.APP_NAME} API ({settings.APP_ENV})...")
    logger.info("Swagger UI available at: http://localhost:8000/docs")
    if not settings.supabase_configured:
        logger.warning("Supabase is not configured; signup, login and the dashboard will fail")


# SHUTDOWN EVENT
@app.on_event("shutdown")
async def shutdown_event():
    logger.info(f"Shutting down {settings.APP_NAME} API...")


# RUN WITH UVICORN
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
