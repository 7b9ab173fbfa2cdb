from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging
import time

from .core.config import settings
from .core.database import AsyncSessionLocal, close_db_connections, create_all
from .core.error_handlers import register_exception_handlers
from .core.logging import setup_logging
from .services.user_service import UserService

# Import all routers
from .routers import (
    health, auth, users, students, teachers, parents, addresses, departments,
    courses, classes, enrollments, attendances, grades, rooms, semesters
)

setup_logging()
logger = logging.getLogger(__name__)


async def bootstrap_admin() -> None:
    """Ensure the configured admin account exists"""
    if not (settings.bootstrap_admin_username and settings.bootstrap_admin_password):
        return
    async with AsyncSessionLocal() as session:
        await UserService(session).ensure_admin(
            settings.bootstrap_admin_username,
            settings.bootstrap_admin_email,
            settings.bootstrap_admin_password,
        )

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting School Management API ({settings.environment})")

    if settings.create_tables_on_startup:
        await create_all()
    await bootstrap_admin()

    yield

    logger.info("Shutting down School Management API")
    await close_db_connections()
    logger.info("Shutdown complete")

app = FastAPI(
    title="School Management API",
    description="Students, staff, courses, classes, enrollments and semesters",
    version=settings.app_version,
    lifespan=lifespan
)

@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    logger.info(f"{request.method} {request.url.path} - {process_time:.3f}s")
    return response

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=3600,
)

register_exception_handlers(app)

# Include all routers
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(students.router)
app.include_router(teachers.router)
app.include_router(parents.router)
app.include_router(addresses.router)
app.include_router(departments.router)
app.include_router(courses.router)
app.include_router(classes.router)
app.include_router(enrollments.router)
app.include_router(attendances.router)
app.include_router(grades.router)
app.include_router(rooms.router)
app.include_router(semesters.router)

@app.get("/")
async def root():
    return {
        "message": "School Management API",
        "version": settings.app_version,
        "docs": "/docs",
        "status": "active"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("school_api.main:app", host="0.0.0.0", port=8000, reload=settings.environment == "development")
