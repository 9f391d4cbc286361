"""
Grades API

Main FastAPI application for the grade-record management system.
Serves CRUD for semesters, courses, examinations and grades, and the
statistics derived from a user's grade attempts.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings
from database import init_db
from grading import AuthorizationError, NotFoundError, ValidationError
from api import (
    users_router,
    semesters_router,
    courses_router,
    examinations_router,
    grades_router,
    stats_router,
)

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# --------------- Lifespan ---------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan handler – initialise DB on startup."""
    logger.info("Initializing database...")
    init_db()
    logger.info("Database initialized.")
    yield


# --------------- FastAPI app ---------------

app = FastAPI(
    title="Grades API",
    description="""
API for recording grade attempts and reading the statistics derived from them.

## Features

### Records
- Semesters, courses and examinations shared by all users
- Grade attempts owned by the user who recorded them

### Statistics
- **Passed courses**: best attempt per course, grouped by semester
- **Average**: count and mean of passed courses with a 5-10 distribution
- **Full distribution**: every attempt bucketed over 0-10
- **Course views**: final grade, attempt history and a paginated attempt table

Requests identify the user with the `X-User-Id` header.
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Exception handlers
@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    logger.warning("%s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=404, content={"detail": exc.message, "type": type(exc).__name__})


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"detail": exc.message, "type": type(exc).__name__})


@app.exception_handler(AuthorizationError)
async def authorization_error_handler(request: Request, exc: AuthorizationError):
    return JSONResponse(status_code=403, content={"detail": exc.message, "type": type(exc).__name__})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": str(exc), "type": type(exc).__name__}
    )


# Include routers
app.include_router(users_router)
app.include_router(semesters_router)
app.include_router(courses_router)
app.include_router(examinations_router)
app.include_router(grades_router)
app.include_router(stats_router)


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint - API health check."""
    return {
        "status": "online",
        "service": "Grades API",
        "version": "1.0.0"
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )
