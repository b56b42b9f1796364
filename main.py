# main.py
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from loangate.api import (
    routes_auth,
    routes_banking,
    routes_admin,
    routes_dev,
)
from loangate.core.config import settings
from loangate.core.db import init_db
from loangate.core.errors import ForbiddenError, LoanGateError, NotFoundError

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


def status_for(exc: LoanGateError) -> int:
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, ForbiddenError):
        return 403
    # ValidationError, StateError
    return 400


def create_app():
    app = FastAPI(title=settings.APP_NAME)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(LoanGateError)
    async def loangate_error_handler(request: Request, exc: LoanGateError):
        return JSONResponse(status_code=status_for(exc), content={"detail": exc.detail})

    app.include_router(routes_auth.router, prefix="/api")
    app.include_router(routes_banking.router, prefix="/api")
    app.include_router(routes_admin.router, prefix="/api")
    app.include_router(routes_dev.router, prefix="/api")

    @app.on_event("startup")
    def on_startup():
        init_db()
        logger.info("Application startup complete")

    return app


app = create_app()
