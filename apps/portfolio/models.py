"""
Portfolio database models.

Three tables:
1. projects - gallery entries, addressed publicly by slug
2. project_images - read-only images owned by a project, shown in order_index order
3. skills - skill badges grouped by category
"""
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from apps.shared.database import Base
from apps.portfolio.codec import encode_tech_stack, decode_tech_stack


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Project(Base):
    """
    Portfolio project.

    The tech stack is persisted as a JSON string in the tech_stack column and
    exposed as a list through the `tech_stack` property, so callers never see
    the serialized form.
    """
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True)
    title = Column(String(200), nullable=False)
    slug = Column(String(200), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=False)
    content = Column(Text, nullable=False)  # Lightweight markup for the detail page
    category = Column(String(50), nullable=False)
    _tech_stack = Column("tech_stack", Text, nullable=False, default="[]")
    github_url = Column(String(500))
    demo_url = Column(String(500))
    image_url = Column(String(500))
    featured = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    images = relationship(
        "ProjectImage",
        back_populates="project",
        order_by="ProjectImage.order_index",
    )

    @property
    def tech_stack(self) -> list[str]:
        """Decode tech stack on read"""
        return decode_tech_stack(self._tech_stack)

    @tech_stack.setter
    def tech_stack(self, value):
        """Encode tech stack on write"""
        self._tech_stack = encode_tech_stack(value)

    def __repr__(self):
        return f"<Project(id={self.id}, slug={self.slug})>"


class ProjectImage(Base):
    """Image attached to a project. Rows are pre-populated, never uploaded."""
    __tablename__ = "project_images"

    id = Column(Integer, primary_key=True)
    url = Column(String(500), nullable=False)
    alt = Column(String(300), nullable=False, default="")
    caption = Column(String(500))
    order_index = Column(Integer, nullable=False, default=0)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False, index=True)

    project = relationship("Project", back_populates="images")


class Skill(Base):
    """Skill badge. Proficiency is on a 1-10 scale."""
    __tablename__ = "skills"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    category = Column(String(50), nullable=False, index=True)
    proficiency = Column(Integer, nullable=False)
    icon_url = Column(String(500))
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
