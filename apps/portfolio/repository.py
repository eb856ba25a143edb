"""
Persistence gateway for projects and skills.

The only code that talks to the relational store. Every function takes a
Session as its first argument; store errors are rolled back, logged and
re-raised as StorageError by `storage_operation`.
"""
import logging
from sqlalchemy.orm import Session, selectinload

from apps.shared.database import transaction
from apps.shared.errors import NotFoundError, ValidationFailure, storage_operation
from apps.portfolio.models import Project, ProjectImage, Skill, utcnow
from apps.portfolio.schemas import ProjectCreate, ProjectUpdate, SkillCreate
from apps.portfolio.seed import SEED_PROJECTS, SEED_SKILLS
from apps.portfolio.slug import slugify

logger = logging.getLogger(__name__)

# Fields that can't be cleared with an explicit null
REQUIRED_FIELDS = {"title", "description", "content", "category", "tech_stack", "featured"}


def _project_query(db: Session):
    return db.query(Project).options(selectinload(Project.images))


def _get_by_slug(db: Session, slug: str) -> Project:
    project = _project_query(db).filter(Project.slug == slug).first()
    if not project:
        raise NotFoundError("Project not found")
    return project


def _derive_slug(db: Session, title: str, current_id: int = None) -> str:
    slug = slugify(title)
    if not slug:
        raise ValidationFailure("Title must contain at least one letter or digit")

    query = db.query(Project.id).filter(Project.slug == slug)
    if current_id is not None:
        query = query.filter(Project.id != current_id)
    if query.first():
        raise ValidationFailure("A project with this title already exists")
    return slug


# ──────────────────────────────────────────────────────────────────────────────
# Projects
# ──────────────────────────────────────────────────────────────────────────────

@storage_operation("Failed to fetch projects")
def list_projects(db: Session) -> list[Project]:
    """
    List all projects with their images.
    Sorted by created_at (descending), newest id first on ties.
    """
    return (
        _project_query(db)
        .order_by(Project.created_at.desc(), Project.id.desc())
        .all()
    )


@storage_operation("Failed to fetch project")
def get_project(db: Session, slug: str) -> Project:
    """Get a single project by slug. Raises NotFoundError."""
    return _get_by_slug(db, slug)


@storage_operation("Failed to create project")
def create_project(db: Session, data: ProjectCreate) -> Project:
    """Create a project. The slug is derived from the title."""
    with transaction(db):
        project = Project(
            title=data.title,
            slug=_derive_slug(db, data.title),
            description=data.description,
            content=data.content,
            category=data.category.value,
            tech_stack=data.tech_stack,
            github_url=data.github_url,
            demo_url=data.demo_url,
            image_url=data.image_url,
            featured=data.featured,
        )
        db.add(project)

    db.refresh(project)
    logger.info(f"Created project {project.slug}")
    return project


@storage_operation("Failed to update project")
def update_project(db: Session, slug: str, data: ProjectUpdate) -> Project:
    """
    Update an existing project.

    Only fields present in the payload change. A new title also renames the
    slug. updated_at is refreshed on every call.
    """
    project = _get_by_slug(db, slug)
    update_data = data.model_dump(exclude_unset=True)

    with transaction(db):
        for key, value in update_data.items():
            if value is None and key in REQUIRED_FIELDS:
                continue
            if key == "title":
                project.slug = _derive_slug(db, value, current_id=project.id)
            if key == "category":
                value = value.value
            setattr(project, key, value)
        project.updated_at = utcnow()

    db.refresh(project)
    logger.info(f"Updated project {slug} -> {project.slug}")
    return project


@storage_operation("Failed to delete project")
def delete_project(db: Session, slug: str) -> None:
    """
    Delete a project and its images.

    Images are removed before the project row so no image ever points at a
    missing project. Both deletes share one transaction.
    """
    project = db.query(Project).filter(Project.slug == slug).first()
    if not project:
        raise NotFoundError("Project not found")

    with transaction(db):
        removed = (
            db.query(ProjectImage)
            .filter(ProjectImage.project_id == project.id)
            .delete(synchronize_session=False)
        )
        db.expire(project, ["images"])
        db.delete(project)

    logger.info(f"Deleted project {slug} ({removed} images)")


# ──────────────────────────────────────────────────────────────────────────────
# Skills
# ──────────────────────────────────────────────────────────────────────────────

@storage_operation("Failed to fetch skills")
def list_skills(db: Session) -> list[Skill]:
    """List all skills sorted by category, then name."""
    return db.query(Skill).order_by(Skill.category.asc(), Skill.name.asc()).all()


@storage_operation("Failed to create skill")
def create_skill(db: Session, data: SkillCreate) -> Skill:
    with transaction(db):
        skill = Skill(
            name=data.name,
            category=data.category.value,
            proficiency=data.proficiency,
            icon_url=data.icon_url,
        )
        db.add(skill)

    db.refresh(skill)
    return skill


# ──────────────────────────────────────────────────────────────────────────────
# Reset
# ──────────────────────────────────────────────────────────────────────────────

@storage_operation("Failed to reset database")
def reset_portfolio(db: Session) -> tuple[int, int]:
    """
    Wipe all projects and skills and reload the seed data.

    Runs as one transaction: images, projects and skills are deleted, seed
    skills are bulk-inserted, then seed projects are added one by one.

    Returns:
        Tuple of (projects_count, skills_count)
    """
    with transaction(db):
        db.query(ProjectImage).delete(synchronize_session=False)
        db.query(Project).delete(synchronize_session=False)
        db.query(Skill).delete(synchronize_session=False)
        db.expunge_all()

        db.add_all([Skill(**skill) for skill in SEED_SKILLS])
        db.flush()

        for seed in SEED_PROJECTS:
            db.add(Project(
                title=seed["title"],
                slug=seed["slug"],
                description=seed["description"],
                content=seed["content"],
                category=seed["category"],
                tech_stack=seed["tech_stack"],
                github_url=seed["github_url"],
                demo_url=seed["demo_url"],
                featured=seed["featured"],
                created_at=seed["created_at"],
                updated_at=seed["created_at"],
            ))
            db.flush()

    logger.info(f"Reset portfolio: {len(SEED_PROJECTS)} projects, {len(SEED_SKILLS)} skills")
    return len(SEED_PROJECTS), len(SEED_SKILLS)
