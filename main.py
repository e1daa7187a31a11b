"""
Photo Booking Calendar - FastAPI Backend
Main application entry point
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
import uvicorn

from app.core.config import settings
from app.core.db import engine, Base
from app.core.errors import CalendarError
from app.api import routes_calendar, routes_events, routes_reminders
from app.services.repositories import use_firestore
from app.utils.responses import calendar_error_response, error_response, format_validation_errors

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    if use_firestore():
        logger.info(f"Using Firestore collection '{settings.FIRESTORE_COLLECTION}'")
    else:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created")
    yield
    logger.info("Application shutdown")

# Create FastAPI application
app = FastAPI(
    title="Photo Booking Calendar",
    description="Admin calendar, event CRUD and day-before reminders for photography bookings",
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are reported as 400 {error}"""
    return error_response(format_validation_errors(exc.errors()), status_code=400)

@app.exception_handler(CalendarError)
async def calendar_error_handler(request: Request, exc: CalendarError):
    return calendar_error_response(exc)

# Include routers
app.include_router(routes_events.router, tags=["events"])
app.include_router(routes_reminders.router, tags=["reminders"])
app.include_router(routes_calendar.router, tags=["calendar"])

@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok"}

@app.get("/", include_in_schema=False)
async def root():
    return RedirectResponse(url=routes_calendar.CALENDAR_PATH)

# Note: Run this ASGI app directly with Uvicorn or Hypercorn. For Gunicorn,
# use `uvicorn.workers.UvicornWorker` instead of wrapping the app.

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="127.0.0.1",
        port=8000,
        reload=True
    )
