"""
Postcard Studio Application Entry Point.
"""
import os
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from sqlalchemy import text
from app.core.config import settings
from app.core.database import engine
from app.core.exceptions import InvalidRequest
from app.core.middleware import TokenMiddleware
from app.router.endpoints import api_router
import logging
import uvicorn

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

STATIC_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "app", "static")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Starting application...")

    # Check database connection
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database connection OK")

        # Auto-create tables in debug mode (use Alembic migrations in production)
        if settings.DEBUG:
            from app.core.database import Base
            from app.model import Postcard  # noqa: F401
            Base.metadata.create_all(bind=engine)
            logger.info("Database tables created (DEBUG mode)")
    except Exception as e:
        logger.error(f"Database connection failed: {e}")

    if settings.use_s3:
        logger.info(f"Blob store: s3://{settings.S3_BUCKET_NAME} ({settings.s3_region})")
    else:
        os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
        logger.info(f"Blob store: local directory {settings.UPLOAD_DIR}")

    if not settings.BEARER_TOKEN:
        logger.warning("BEARER_TOKEN is not set; protected routes will reject every request")

    yield

    logger.info("Shutting down...")
    engine.dispose()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    lifespan=lifespan,
)

# Bearer token extraction
app.add_middleware(TokenMiddleware)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes
app.include_router(api_router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and parameters are 400 INVALID_REQUEST, not 422."""
    error = InvalidRequest()
    detail = dict(error.detail, errors=jsonable_encoder(exc.errors()))
    return JSONResponse(status_code=error.status_code, content={"detail": detail})


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/", include_in_schema=False)
async def root():
    """Serve the postcard generator page."""
    return FileResponse(os.path.join(STATIC_DIR, "index.html"), media_type="text/html")


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
