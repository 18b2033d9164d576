# boutique_manager/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from boutique_manager.api.v1.router import api_router
from boutique_manager.config.database import engine
from boutique_manager.config.settings import settings
from boutique_manager.core.exceptions import AppError, ErrorKind, format_validation_errors
from boutique_manager.core.middleware import setup_middleware
from boutique_manager.shared.database.models import Base
from boutique_manager.shared.database.repository import conflict_from_integrity
from boutique_manager.shared.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.AUTH_ERROR: 401,
    ErrorKind.AUTHORIZATION_ERROR: 403,
    ErrorKind.VALIDATION_ERROR: 400,
    ErrorKind.CONFLICT: 400,
    ErrorKind.BUSINESS_ERROR: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INTERNAL_ERROR: 500,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    logger.info(f"{settings.app_name} v{settings.version} démarrage")
    logger.info(f"Environnement: {'development' if settings.debug else 'production'}")
    logger.info(f"Base de données: {settings.database_url.split('@')[-1]}")
    Base.metadata.create_all(bind=engine)

    yield

    # Shutdown
    logger.info(f"{settings.app_name} arrêt")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Gestion multi-boutiques : catalogue, stocks, ventes, créances et trésorerie",
    docs_url="/docs",
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    status_code = STATUS_BY_KIND.get(exc.kind, 500)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} - {exc.message}")
    return JSONResponse(status_code=status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(
            error="Données invalides",
            code=ErrorKind.VALIDATION_ERROR.value,
            details=format_validation_errors(exc.errors()),
        ).model_dump(),
    )


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning(f"Violation de contrainte sur {request.url.path}: {exc.orig}")
    return JSONResponse(status_code=400, content=conflict_from_integrity(exc).to_dict())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Erreur non gérée sur {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Erreur interne du serveur", code=ErrorKind.INTERNAL_ERROR.value
        ).model_dump(exclude_none=True),
    )


# Setup middleware
setup_middleware(app)

# Include routers
app.include_router(api_router, prefix="/api/v1")


# Root endpoint
@app.get("/")
async def root():
    return {
        "message": f"{settings.app_name}",
        "version": settings.version,
        "status": "running",
        "environment": "production" if not settings.debug else "development",
        "docs": "/docs",
        "api": "/api/v1"
    }


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "version": settings.version,
        "app": settings.app_name,
        "environment": "production" if not settings.debug else "development"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "boutique_manager.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
