# ebe/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ebe.api.v1.api import api_router
from ebe.core.config import settings
from ebe.core.exceptions import AppError
from ebe.core.limiter import limiter
from ebe.middleware import (
    app_error_handler,
    database_error_handler,
    http_error_handler,
    rate_limit_error_handler,
    unexpected_error_handler,
    validation_error_handler,
)

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("ebe meeting service starting up (env=%s)", settings.ENV)
    yield
    logger.info("ebe meeting service shutting down")


app = FastAPI(
    title="ebe Meeting Service",
    version="1.0.0",
    description="""
        Book-club video meetings for the ebe reading journal.

        ## Features

        * **Waiting room**: members wait for a host to admit them
        * **Moderation**: admins and moderators list, admit and reject
        * **Meetings**: read and update meeting settings

        ## Authentication

        All endpoints except health checks require a JWT via the
        `Authorization: Bearer <token>` header.
        """,
    lifespan=lifespan,
)

app.state.limiter = limiter

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(StarletteHTTPException, http_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)
app.add_exception_handler(SQLAlchemyError, database_error_handler)
app.add_exception_handler(RateLimitExceeded, rate_limit_error_handler)
app.add_exception_handler(Exception, unexpected_error_handler)

app.include_router(api_router, prefix="/api/v1")


@app.get("/")
def read_root():
    return {"status": "ebe meeting service is running"}
