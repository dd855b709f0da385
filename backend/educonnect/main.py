"""
EduConnect - FastAPI Main Application
"""

import logging

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from educonnect.api.v1 import auth
from educonnect.core.config import settings
from educonnect.core.db import get_db
from educonnect.core.errors import ServiceError, StorageFault
from educonnect.routers import admin, search, sessions, users

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Tutoring marketplace connecting students with verified tutors",
    version=settings.APP_VERSION,
)

app.include_router(auth.router, prefix="/api/v1")
app.include_router(users.router, prefix="/api/v1")
app.include_router(sessions.router, prefix="/api/v1")
app.include_router(search.router, prefix="/api/v1")
app.include_router(admin.router, prefix="/api/v1")

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
def handle_service_error(request: Request, exc: ServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(SQLAlchemyError)
def handle_storage_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Storage error on %s %s", request.method, request.url.path)
    fault = StorageFault()
    return JSONResponse(status_code=fault.status_code, content={"detail": fault.message})


@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": f"{settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "status": "running",
    }


@app.get("/health")
def health():
    """Health check endpoint"""
    return {"status": "ok"}


@app.get("/health/db")
def health_db(db: Session = Depends(get_db)):
    """Database health check endpoint"""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.exception("Database health check failed")
        raise HTTPException(
            status_code=503,
            detail={
                "status": "error",
                "database": "unavailable",
            },
        ) from exc

    return {"status": "ok", "db": "ok"}
