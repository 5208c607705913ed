from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import os
import logging
from contextlib import asynccontextmanager

from . import config
from .database import get_db, check_database_connection, create_tables
from .exceptions import register_exception_handlers
from .auth import auth_router
from .assignments import assignments_router
from .notifications import notifications_router

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

VERSION = "0.1.0"

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Check the database and create tables before serving."""
    logger.info("Starting up FraudCheck API...")
    # Strict DB connectivity check in production; only skip during pytest
    if os.getenv("PYTEST_CURRENT_TEST") is not None:
        logger.info("Skipping DB connectivity check during tests")
    else:
        if check_database_connection():
            create_tables()
        else:
            logger.error("Database connection failed")
            raise Exception("Cannot connect to database")
    yield
    logger.info("Shutting down FraudCheck API...")

app = FastAPI(
    title="FraudCheck API",
    description="Assignment submission and plagiarism review service",
    version=VERSION,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Routers
app.include_router(auth_router)
app.include_router(assignments_router)
app.include_router(notifications_router)

@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "FraudCheck API", "version": VERSION}

@app.get("/health")
async def health_check(db: Session = Depends(get_db)):
    """Health check endpoint with database connectivity test."""
    try:
        db.execute(text("SELECT 1"))
        return {"status": "healthy", "database": "connected", "version": VERSION}
    except SQLAlchemyError as e:
        logger.error(f"Health check failed: {e}")
        return {
            "status": "unhealthy",
            "database": "disconnected",
            "error": str(e),
            "version": VERSION
        }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
