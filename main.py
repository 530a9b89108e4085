from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError
from app.db.database import engine, Base, SessionLocal
from app.db.store import EntityStore
from app.db.seed import ensure_root_account, load_demo_data
from app.api.v1.endpoints import accounts, auth, booths, scope

from app.core.exception import (
    BoothsError,
    booths_exception_handler,
    validation_exception_handler,
    http_exception_handler,
    general_exception_handler
)
from app.core.constants import APIConfig, DatabaseConfig, LoggingConfig

# Import models to register them with SQLAlchemy
from app.models import account, booth  # noqa: F401

logging.basicConfig(
    level=LoggingConfig.DEFAULT_LOG_LEVEL,
    format=LoggingConfig.LOG_FORMAT,
    datefmt=LoggingConfig.DATE_FORMAT
)
logging.getLogger("sqlalchemy.engine").setLevel(LoggingConfig.DATABASE_LOG_LEVEL)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create all tables and make sure the hierarchy has its root
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        store = EntityStore(db)
        ensure_root_account(store)
        if DatabaseConfig.SEED_DEMO_DATA:
            load_demo_data(store)
    finally:
        db.close()
    logger.info(f"{APIConfig.API_TITLE} {APIConfig.API_VERSION} started")
    yield


# Create FastAPI app with centralized configuration
app = FastAPI(
    title=APIConfig.API_TITLE,
    description=APIConfig.API_DESCRIPTION,
    version=APIConfig.API_VERSION,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=APIConfig.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# Register exception handlers
app.add_exception_handler(BoothsError, booths_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(ValidationError, validation_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

# Include routers with centralized prefix
app.include_router(auth.router, prefix=APIConfig.API_V1_PREFIX)
app.include_router(scope.router, prefix=APIConfig.API_V1_PREFIX)
app.include_router(accounts.router, prefix=APIConfig.API_V1_PREFIX)
app.include_router(booths.router, prefix=APIConfig.API_V1_PREFIX)

@app.get("/")
def read_root():
    return {"message": "Welcome to the Booths API!"}
