"""
Organization Message Service
PostgreSQL Backend
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv
from pathlib import Path
from typing import Dict, List
import os
import logging

# Load environment variables
ROOT_DIR = Path(__file__).parent
load_dotenv(ROOT_DIR / '.env')

# ==================== Logging Configuration ====================
logging.basicConfig(
    level=os.environ.get('LOG_LEVEL', 'INFO').upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# ==================== Exception Handlers ====================

def request_errors_by_field(exc: RequestValidationError) -> Dict[str, List[str]]:
    """Group request validation errors by the offending field name."""
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "path", "query")]
        field = ".".join(location) or "body"
        errors.setdefault(field, []).append(error.get("msg", "Invalid value"))
    return errors


async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Rejected malformed request to {request.url.path}")
    return JSONResponse(status_code=400, content=request_errors_by_field(exc))


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


# Create the main app
app = FastAPI(
    title="Organization Message Service",
    description="Organization-scoped messages - PostgreSQL Backend",
    version="1.0.0"
)
register_exception_handlers(app)

# Health check endpoint at root level (for Kubernetes)
@app.get("/health")
async def root_health_check():
    """Health check endpoint for Kubernetes liveness/readiness probes"""
    return {"status": "healthy", "database": "PostgreSQL"}

# ==================== PostgreSQL Routes ====================
from routes.pg_messages_routes import pg_messages_router

app.include_router(pg_messages_router)

# ==================== CORS Configuration ====================
app.add_middleware(
    CORSMiddleware,
    allow_credentials=True,
    allow_origins=os.environ.get('CORS_ORIGINS', '*').split(','),
    allow_methods=["*"],
    allow_headers=["*"],
)

# ==================== Startup & Shutdown Events ====================
@app.on_event("startup")
async def startup_db_client():
    """Initialize PostgreSQL database on startup"""
    logger.info("Starting Organization Message Service...")

    from database import init_postgres_db
    await init_postgres_db()

    logger.info("PostgreSQL database initialized successfully")

@app.on_event("shutdown")
async def shutdown_db_client():
    """Close database connections on shutdown"""
    logger.info("Shutting down...")

    from database import close_postgres_db
    await close_postgres_db()

    logger.info("Database connections closed")
