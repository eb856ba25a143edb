"""
Tests for the persistence gateway, run directly against a session.
"""
import pytest

from apps.shared.database import Base, engine
from apps.shared.errors import NotFoundError, StorageError, ValidationFailure
from apps.portfolio import repository
from apps.portfolio.models import Project, ProjectImage, Skill
from apps.portfolio.schemas import ProjectCreate, ProjectUpdate, SkillCreate
from apps.portfolio.seed import SEED_PROJECTS, SEED_SKILLS


def create(db, project_payload, **overrides):
    return repository.create_project(db, ProjectCreate(**project_payload(**overrides)))


def test_create_derives_slug_and_appears_in_list(db, project_payload):
    project = create(db, project_payload)

    assert project.slug == "complex-title-123"
    assert project.tech_stack == ["Python", "FastAPI"]
    assert project.images == []
    assert project.created_at is not None

    slugs = [p.slug for p in repository.list_projects(db)]
    assert slugs == ["complex-title-123"]


def test_tech_stack_is_stored_serialized(db, project_payload):
    project = create(db, project_payload, techStack=["Go", "Rust"])
    assert project._tech_stack == '["Go", "Rust"]'


def test_list_orders_newest_first(db, project_payload):
    create(db, project_payload, title="First")
    create(db, project_payload, title="Second")
    create(db, project_payload, title="Third")

    assert [p.slug for p in repository.list_projects(db)] == ["third", "second", "first"]


def test_create_rejects_empty_slug(db, project_payload):
    with pytest.raises(ValidationFailure):
        create(db, project_payload, title="!!!")
    assert db.query(Project).count() == 0


def test_create_rejects_duplicate_slug(db, project_payload):
    create(db, project_payload, title="Same Title")
    with pytest.raises(ValidationFailure):
        create(db, project_payload, title="same  title!")
    assert db.query(Project).count() == 1


def test_get_project_missing_slug(db):
    with pytest.raises(NotFoundError):
        repository.get_project(db, "nope")


def test_update_without_title_keeps_slug_and_bumps_updated_at(db, project_payload):
    project = create(db, project_payload)
    before = project.updated_at

    updated = repository.update_project(
        db, "complex-title-123", ProjectUpdate(description="New description")
    )

    assert updated.slug == "complex-title-123"
    assert updated.description == "New description"
    assert updated.updated_at > before
    assert updated.created_at == project.created_at


def test_update_with_title_renames_slug(db, project_payload):
    create(db, project_payload)

    updated = repository.update_project(db, "complex-title-123", ProjectUpdate(title="Brand New Name"))

    assert updated.slug == "brand-new-name"
    with pytest.raises(NotFoundError):
        repository.get_project(db, "complex-title-123")


def test_update_same_slug_title_is_not_a_collision(db, project_payload):
    create(db, project_payload)
    updated = repository.update_project(db, "complex-title-123", ProjectUpdate(title="Complex  Title 123"))
    assert updated.slug == "complex-title-123"
    assert updated.title == "Complex  Title 123"


def test_update_rename_onto_existing_slug_fails(db, project_payload):
    create(db, project_payload, title="Alpha")
    create(db, project_payload, title="Beta")
    with pytest.raises(ValidationFailure):
        repository.update_project(db, "beta", ProjectUpdate(title="ALPHA"))
    assert repository.get_project(db, "beta").title == "Beta"


def test_update_tech_stack_and_nulls(db, project_payload):
    create(db, project_payload)

    updated = repository.update_project(
        db,
        "complex-title-123",
        ProjectUpdate.model_validate({"techStack": [], "githubUrl": None, "title": None}),
    )

    assert updated.tech_stack == []
    assert updated.github_url is None
    assert updated.title == "Complex Title! 123"


def test_update_missing_slug(db):
    with pytest.raises(NotFoundError):
        repository.update_project(db, "nope", ProjectUpdate(description="x"))


def test_images_are_ordered_by_order_index(db, project_payload):
    project = create(db, project_payload)
    db.add_all([
        ProjectImage(url="/img/c.png", alt="c", order_index=2, project_id=project.id),
        ProjectImage(url="/img/a.png", alt="a", order_index=0, project_id=project.id),
        ProjectImage(url="/img/b.png", alt="b", order_index=1, project_id=project.id, caption="B"),
    ])
    db.commit()
    db.expire_all()

    fetched = repository.get_project(db, project.slug)
    assert [image.alt for image in fetched.images] == ["a", "b", "c"]


def test_delete_removes_images_before_project(db, project_payload):
    project = create(db, project_payload)
    other = create(db, project_payload, title="Other")
    project_id = project.id
    db.add_all(
        [ProjectImage(url=f"/img/{i}.png", alt=str(i), order_index=i, project_id=project_id) for i in range(3)]
        + [ProjectImage(url="/img/other.png", alt="other", order_index=0, project_id=other.id)]
    )
    db.commit()

    repository.delete_project(db, "complex-title-123")

    assert db.query(ProjectImage).filter(ProjectImage.project_id == project_id).count() == 0
    assert db.query(Project).filter(Project.slug == "complex-title-123").count() == 0
    assert db.query(ProjectImage).filter(ProjectImage.project_id == other.id).count() == 1


def test_delete_without_images(db, project_payload):
    create(db, project_payload)
    repository.delete_project(db, "complex-title-123")
    assert db.query(Project).count() == 0


def test_delete_missing_slug(db):
    with pytest.raises(NotFoundError):
        repository.delete_project(db, "nope")


def test_skills_sorted_by_category_then_name(db):
    for name, category in [("Zig", "LANGUAGES"), ("Git", "TOOLS"), ("Ada", "LANGUAGES"), ("Redis", "DATABASES")]:
        repository.create_skill(db, SkillCreate(name=name, category=category, proficiency=5))

    skills = repository.list_skills(db)

    assert [(s.category, s.name) for s in skills] == [
        ("DATABASES", "Redis"),
        ("LANGUAGES", "Ada"),
        ("LANGUAGES", "Zig"),
        ("TOOLS", "Git"),
    ]


def test_reset_reseeds_everything(db, project_payload):
    create(db, project_payload)
    repository.create_skill(db, SkillCreate(name="Cobol", category="LANGUAGES", proficiency=2))

    projects_count, skills_count = repository.reset_portfolio(db)

    assert (projects_count, skills_count) == (len(SEED_PROJECTS), len(SEED_SKILLS))
    projects = repository.list_projects(db)
    assert [p.slug for p in projects] == [
        "task-management-app",
        "iot-sensor-network",
        "portfolio-website",
        "3d-printer-control-system",
    ]
    assert projects[0].tech_stack == ["React Native", "TypeScript", "Firebase"]

    skills = repository.list_skills(db)
    assert len(skills) == len(SEED_SKILLS)
    assert [(s.category, s.name) for s in skills] == sorted(
        (s["category"], s["name"]) for s in SEED_SKILLS
    )


def test_reset_clears_images(db, project_payload):
    project = create(db, project_payload)
    db.add(ProjectImage(url="/img/x.png", alt="x", order_index=0, project_id=project.id))
    db.commit()

    repository.reset_portfolio(db)

    assert db.query(ProjectImage).count() == 0


def test_failed_reset_rolls_back(db, project_payload, monkeypatch):
    create(db, project_payload, title="Keep Me")
    # Duplicate slug makes the last insert fail
    monkeypatch.setattr(repository, "SEED_PROJECTS", SEED_PROJECTS + [SEED_PROJECTS[0]])

    with pytest.raises(StorageError) as exc_info:
        repository.reset_portfolio(db)

    assert exc_info.value.message.startswith("Failed to reset database")
    assert [p.slug for p in repository.list_projects(db)] == ["keep-me"]
    assert db.query(Skill).count() == 0


def test_storage_failure_is_sanitized(db):
    Base.metadata.drop_all(bind=engine)

    with pytest.raises(StorageError) as exc_info:
        repository.list_projects(db)

    assert exc_info.value.message.startswith("Failed to fetch projects (Error ID: ")
    assert "no such table" not in exc_info.value.message


def test_seed_database_entry_point(db):
    from apps.portfolio.seed import seed_database

    seed_database()

    assert db.query(Project).count() == len(SEED_PROJECTS)
    assert db.query(Skill).count() == len(SEED_SKILLS)
