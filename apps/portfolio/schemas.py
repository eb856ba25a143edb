"""
Pydantic schemas for the Portfolio API.

Defines request/response models with validation. Fields are exposed in
camelCase on the wire (techStack, githubUrl, ...) and accept snake_case too.

Kept free of database imports so the client-side store can use these models
without an engine.
"""
import enum
from datetime import datetime
from typing import Annotated, Optional
from pydantic import BaseModel, BeforeValidator, Field, field_validator
from pydantic.alias_generators import to_camel

from apps.portfolio.codec import decode_tech_stack


class ProjectCategory(str, enum.Enum):
    HARDWARE = "HARDWARE"
    WEB = "WEB"
    MOBILE = "MOBILE"


class SkillCategory(str, enum.Enum):
    LANGUAGES = "LANGUAGES"
    FRAMEWORKS = "FRAMEWORKS"
    TOOLS = "TOOLS"
    DATABASES = "DATABASES"


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


# Optional link: "" means not provided
OptionalUrl = Annotated[Optional[str], BeforeValidator(_blank_to_none)]


class CamelModel(BaseModel):
    """Base schema using camelCase aliases."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class ProjectImageResponse(CamelModel):
    """Project image, ordered by orderIndex."""
    id: int
    url: str
    alt: str = ""
    caption: Optional[str] = None
    order_index: int = 0


class ProjectCreate(CamelModel):
    """Schema for creating a project. The slug is always derived from the title."""
    title: str = Field(..., min_length=1, max_length=200)
    description: str
    content: str
    category: ProjectCategory
    tech_stack: list[str] = Field(default_factory=list)
    github_url: OptionalUrl = None
    demo_url: OptionalUrl = None
    image_url: OptionalUrl = None
    featured: bool = False

    @field_validator("tech_stack", mode="before")
    @classmethod
    def default_tech_stack(cls, value):
        return [] if value is None else value


class ProjectUpdate(CamelModel):
    """Schema for updating a project. All fields optional; only set fields change."""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    content: Optional[str] = None
    category: Optional[ProjectCategory] = None
    tech_stack: Optional[list[str]] = None
    github_url: OptionalUrl = None
    demo_url: OptionalUrl = None
    image_url: OptionalUrl = None
    featured: Optional[bool] = None


class ProjectResponse(CamelModel):
    """Schema for project responses. techStack is always a list."""
    id: int
    title: str
    slug: str
    description: str
    content: str
    category: ProjectCategory
    tech_stack: list[str] = Field(default_factory=list)
    github_url: Optional[str] = None
    demo_url: Optional[str] = None
    image_url: Optional[str] = None
    featured: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    images: list[ProjectImageResponse] = Field(default_factory=list)

    @field_validator("tech_stack", mode="before")
    @classmethod
    def decode_serialized_tech_stack(cls, value):
        # Accepts the stored JSON string as well as a list
        return decode_tech_stack(value)

    @field_validator("images", mode="before")
    @classmethod
    def default_images(cls, value):
        return [] if value is None else value


class SkillCreate(CamelModel):
    """Schema for creating a skill."""
    name: str = Field(..., min_length=1, max_length=100)
    category: SkillCategory
    proficiency: int = Field(..., ge=1, le=10)
    icon_url: OptionalUrl = None


class SkillResponse(CamelModel):
    """Schema for skill responses."""
    id: int
    name: str
    category: SkillCategory
    proficiency: int
    icon_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class MessageResponse(BaseModel):
    message: str


class ResetResponse(CamelModel):
    """Outcome of a reset to seed data."""
    success: bool
    message: str
    projects_count: int
    skills_count: int
