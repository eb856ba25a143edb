"""
Portfolio API

CRUD endpoints for portfolio projects and skills, plus a reset to seed data.
The admin surface is unauthenticated; put an access-control layer in front
of it before exposing it publicly.
"""
import os
import logging
from fastapi import FastAPI, APIRouter, Depends, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from sqlalchemy.orm import Session

from apps.shared.database import get_db, Base, engine, check_db_connection
from apps.shared.cors import setup_cors
from apps.shared.errors import PortfolioError, NotFoundError, ValidationFailure, StorageError
from apps.portfolio import repository
from apps.portfolio.schemas import (
    ProjectCreate,
    ProjectUpdate,
    ProjectResponse,
    SkillCreate,
    SkillResponse,
    MessageResponse,
    ResetResponse,
)

logger = logging.getLogger(__name__)
logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())

# Create tables
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Portfolio API",
    version="1.0.0",
    description="Portfolio projects and skills with admin CRUD",
    docs_url="/docs",
    openapi_url="/openapi.json",
)

# Setup CORS from shared configuration
setup_cors(app)

ERROR_STATUS = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ValidationFailure: status.HTTP_400_BAD_REQUEST,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(message: str, category: str, status_code: int) -> JSONResponse:
    """Consistent error payloads across the API."""
    return JSONResponse(
        status_code=status_code,
        content={
            "error": message,
            "category": category,
        },
    )


@app.exception_handler(PortfolioError)
async def portfolio_exception_handler(request: Request, exc: PortfolioError):
    status_code = ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code < 500:
        logger.info("%s %s: %s", request.method, request.url.path, exc.message)
    return error_response(exc.message, exc.category, status_code)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = f"{location}: {first.get('msg')}" if location else "Invalid request body"
    return error_response(
        message=message,
        category="validation",
        status_code=422,
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    category = "server_error" if exc.status_code >= 500 else "client_error"
    return error_response(str(exc.detail), category, exc.status_code)


@app.exception_handler(Exception)
async def unexpected_exception_handler(request: Request, exc: Exception):
    logger.exception("Unexpected error on %s %s", request.method, request.url.path, exc_info=exc)
    return error_response(
        message="An unexpected server error occurred. Please try again later.",
        category="server_error",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


@app.get("/health")
def health():
    """Health check endpoint."""
    db_connected = check_db_connection()
    return {
        "status": "ok" if db_connected else "degraded",
        "service": "portfolio",
        "database": "connected" if db_connected else "disconnected",
    }


# ──────────────────────────────────────────────────────────────────────────────
# Projects
# ──────────────────────────────────────────────────────────────────────────────

projects_router = APIRouter(prefix="/projects", tags=["projects"])


@projects_router.get("", response_model=list[ProjectResponse])
def list_projects(db: Session = Depends(get_db)):
    """
    List all projects with ordered images.
    Sorted by created_at (descending).
    """
    return repository.list_projects(db)


@projects_router.post("", response_model=ProjectResponse, status_code=201)
def create_project(project_data: ProjectCreate, db: Session = Depends(get_db)):
    """Create a new project. The slug is generated from the title."""
    return repository.create_project(db, project_data)


@projects_router.post("/reset", response_model=ResetResponse)
def reset_projects(db: Session = Depends(get_db)):
    """Wipe all projects and skills and reload the seed data."""
    projects_count, skills_count = repository.reset_portfolio(db)
    return ResetResponse(
        success=True,
        message="Database reset to seed data successfully",
        projects_count=projects_count,
        skills_count=skills_count,
    )


@projects_router.get("/{slug}", response_model=ProjectResponse)
def get_project(slug: str, db: Session = Depends(get_db)):
    """Get a single project by slug."""
    return repository.get_project(db, slug)


@projects_router.put("/{slug}", response_model=ProjectResponse)
def update_project(slug: str, project_data: ProjectUpdate, db: Session = Depends(get_db)):
    """Update an existing project. Changing the title changes the slug."""
    return repository.update_project(db, slug, project_data)


@projects_router.delete("/{slug}", response_model=MessageResponse)
def delete_project(slug: str, db: Session = Depends(get_db)):
    """Delete a project together with its images."""
    repository.delete_project(db, slug)
    return MessageResponse(message="Project deleted successfully")


# ──────────────────────────────────────────────────────────────────────────────
# Skills
# ──────────────────────────────────────────────────────────────────────────────

skills_router = APIRouter(prefix="/skills", tags=["skills"])


@skills_router.get("", response_model=list[SkillResponse])
def list_skills(db: Session = Depends(get_db)):
    """List all skills sorted by category, then name."""
    return repository.list_skills(db)


@skills_router.post("", response_model=SkillResponse, status_code=201)
def create_skill(skill_data: SkillCreate, db: Session = Depends(get_db)):
    """Create a new skill."""
    return repository.create_skill(db, skill_data)


app.include_router(projects_router)
app.include_router(skills_router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
