"""
Derived views over an already-loaded project or skill list.

Pure functions; they never touch the network and keep the input order.
"""
from typing import Iterable, Optional

from apps.portfolio.schemas import ProjectResponse, SkillResponse


def find_by_slug(projects: Iterable[ProjectResponse], slug: str) -> Optional[ProjectResponse]:
    return next((project for project in projects if project.slug == slug), None)


def featured_projects(projects: Iterable[ProjectResponse]) -> list[ProjectResponse]:
    return [project for project in projects if project.featured is True]


def projects_by_category(projects: Iterable[ProjectResponse], category: str) -> list[ProjectResponse]:
    """Projects whose category matches, given as an enum member or its name."""
    return [project for project in projects if project.category == category]


def group_skills_by_category(skills: Iterable[SkillResponse]) -> dict[str, list[SkillResponse]]:
    """Group skills for the skills section, keeping first-seen category order."""
    groups: dict[str, list[SkillResponse]] = {}
    for skill in skills:
        groups.setdefault(skill.category.value, []).append(skill)
    return groups
