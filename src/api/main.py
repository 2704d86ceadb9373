"""
FastAPI application - Main entry point
"""

from dotenv import load_dotenv

load_dotenv()

import asyncio
import logging
from datetime import datetime

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.collections_router import api as collections_api
from src.api.dependencies import app_config, current_channel_reader, document_store, get_db
from src.api.search_router import api as search_api
from src.error_handler import ErrorHandler
from src.errors import ServiceError

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SERVICE_NAME = "Channel Procurement API"
VERSION = "1.0.0"

# Initialize FastAPI app
app = FastAPI(
    title=SERVICE_NAME,
    description="Telegram channel search with AI extraction, plus supplier catalogs, RFQs and open tenders",
    version=VERSION,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=app_config.server.cors_origins,
    allow_credentials=True,
    allow_methods=app_config.server.cors_methods,
    allow_headers=app_config.server.cors_headers,
)

error_handler = ErrorHandler()

app.include_router(search_api)
app.include_router(collections_api)


# ============================================================================
# EXCEPTION HANDLERS
# ============================================================================
@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content=error_handler.handle_validation_errors(exc.errors()))


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse(status_code=exc.status_code, content=error_handler.handle_exception(exc))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    content = error_handler.handle_exception(exc, context={"path": request.url.path})
    return JSONResponse(status_code=500, content=content)


# ============================================================================
# ENDPOINTS
# ============================================================================
@app.get("/", tags=["Health"])
async def root():
    """Health check endpoint."""
    return {"service": SERVICE_NAME, "status": "healthy", "version": VERSION, "timestamp": datetime.now().isoformat()}


@app.get("/health", tags=["Health"])
async def health_check(db=Depends(get_db)):
    """Detailed health check (document store, Telegram session)."""
    reader = current_channel_reader()
    database_ok = await asyncio.to_thread(db.ping)
    return {
        "status": "healthy" if database_ok else "degraded",
        "database": "connected" if database_ok else "unreachable",
        "telegram": "connected" if reader is not None and reader.is_connected() else "disconnected",
        "timestamp": datetime.now().isoformat(),
    }


# ============================================================================
# STARTUP/SHUTDOWN EVENTS
# ============================================================================
@app.on_event("startup")
async def startup_event():
    """Initialize on startup"""
    logger.info("Starting %s...", SERVICE_NAME)
    if not app_config.database_url:
        logger.info("DATABASE_URL not set; using in-memory document store")

    try:
        document_store.create_tables()
        logger.info("Database tables initialized")
    except ServiceError as e:
        logger.error("Error initializing database: %s", e.details or e)


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    logger.info("Shutting down %s...", SERVICE_NAME)
    reader = current_channel_reader()
    if reader is not None and reader.is_connected():
        await reader.disconnect()
