import structlog
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from camp_eval.config import settings
from camp_eval.core.errors import repository_exception_handler, validation_exception_handler
from camp_eval.core.exceptions import RepositoryException
from camp_eval.logging_config import configure_logging

# IMPORT ROUTERS
from camp_eval.routers.auth import router as auth_router
from camp_eval.routers.health import router as health_router
from camp_eval.routers.rating_schemas import router as rating_schemas_router
from camp_eval.routers.registrations import router as registrations_router
from camp_eval.routers.staff import router as staff_router
from camp_eval.routers.subjects import router as subjects_router

load_dotenv()

logger = structlog.get_logger()


# SWAGGER UI: tag display order
_OPENAPI_TAGS = [
    {"name": "Root"},
    {"name": "Health"},
    {"name": "Registrations"},
    {"name": "Auth"},
    {"name": "Ratings"},
    {"name": "Subjects"},
    {"name": "Staff"},
]

# FASTAPI APPLICATION CONFIGURATION
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=_OPENAPI_TAGS,
)

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

# REGISTER EXCEPTION HANDLERS
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(RepositoryException, repository_exception_handler)

# REGISTER ROUTERS (order matches _OPENAPI_TAGS)
app.include_router(health_router)           # Health
app.include_router(registrations_router)    # Registrations
app.include_router(auth_router)             # Auth
app.include_router(rating_schemas_router)   # Ratings
app.include_router(subjects_router)         # Subjects
app.include_router(staff_router)            # Staff


# ROOT ENDPOINT
@app.get("/", tags=["Root"], summary="Root endpoint")
async def root():
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc"
        },
        "status": "running"
    }


# STARTUP EVENT
@app.on_event("startup")
async def startup_event():
    configure_logging()
    logger.info("startup", service=settings.APP_NAME, env=settings.APP_ENV, docs="/docs")


# SHUTDOWN EVENT
@app.on_event("shutdown")
async def shutdown_event():
    logger.info("shutdown", service=settings.APP_NAME)


# RUN WITH UVICORN
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "camp_eval.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
