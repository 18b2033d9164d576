# boutique_manager/core/middleware.py
import logging
import time

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from boutique_manager.config.settings import settings

logger = logging.getLogger(__name__)


def setup_middleware(app: FastAPI):
    """Configure les middlewares de l'application"""

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request, call_next):
        start_time = time.time()

        response = await call_next(request)

        process_time = time.time() - start_time
        user_id = getattr(request.state, "user_id", None) or "-"
        boutique_id = getattr(request.state, "boutique_id", None) or "*"
        logger.info(
            f"{request.method} {request.url.path} - "
            f"User: {user_id} - Boutique: {boutique_id} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.4f}s"
        )

        return response
