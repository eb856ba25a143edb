"""
Client-side project store.

Mirrors the server's project list for a UI. The server list is always
authoritative: after every mutation the store reloads the full list instead
of patching its local copy.

Usage:
    async with PortfolioClient() as client:
        store = ProjectStore(client)
        unsubscribe = store.subscribe(lambda s: render(s.projects))
        await store.start()
        await store.add_project({...})
"""
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional

import httpx
from pydantic import ValidationError

from apps.portfolio import views
from apps.portfolio.client import PortfolioClient
from apps.portfolio.codec import decode_tech_stack
from apps.portfolio.schemas import ProjectResponse

logger = logging.getLogger(__name__)

Listener = Callable[["ProjectStore"], Any]


class ProjectStoreError(Exception):
    """A store mutation failed. The message is safe to show to users."""


class ProjectNotFoundError(ProjectStoreError):
    """The id does not match any project held by the store."""


def to_project(raw: dict) -> ProjectResponse:
    """
    Convert a project payload from the API into its in-memory form.

    techStack may arrive as a list or as its JSON string; anything
    unparseable becomes []. Missing timestamps default to now.
    """
    now = datetime.now(timezone.utc)
    data = dict(raw)
    data["techStack"] = decode_tech_stack(data.pop("techStack", data.pop("tech_stack", None)))
    data["createdAt"] = data.get("createdAt") or now
    data["updatedAt"] = data.get("updatedAt") or now
    return ProjectResponse.model_validate(data)


class ProjectStore:
    """
    Observable mirror of the project list.

    State:
        projects: deserialized projects, in server order
        loading: True while the initial load or a reset is running
        error: readable message from the last failed load, else None
    """

    def __init__(self, client: PortfolioClient):
        self._client = client
        self._listeners: list[Listener] = []
        self._started = False
        self.projects: list[ProjectResponse] = []
        self.loading = False
        self.error: Optional[str] = None

    # ──────────────────────────────────────────────────────────────────────
    # Observation
    # ──────────────────────────────────────────────────────────────────────

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with the store after each change."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self):
        for listener in list(self._listeners):
            listener(self)

    # ──────────────────────────────────────────────────────────────────────
    # Loading
    # ──────────────────────────────────────────────────────────────────────

    async def start(self):
        """Initial load. Later calls are no-ops; use load() to refresh."""
        if self._started:
            return
        self._started = True
        await self.load()

    async def load(self):
        """Fetch the full project list. Failures leave an empty list and set `error`."""
        self.loading = True
        self.error = None
        self._notify()
        try:
            await self._reload()
        finally:
            self.loading = False
            self._notify()

    async def _reload(self):
        try:
            raw_projects = await self._client.list_projects()
            self.projects = [to_project(raw) for raw in raw_projects]
            self.error = None
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            logger.error(f"Error loading projects: {e}")
            self.projects = []
            self.error = "Failed to load projects"
        self._notify()

    # ──────────────────────────────────────────────────────────────────────
    # Mutations
    # ──────────────────────────────────────────────────────────────────────

    def _slug_for(self, project_id: int) -> str:
        for project in self.projects:
            if project.id == project_id:
                return project.slug
        raise ProjectNotFoundError("Project not found")

    async def add_project(self, data: dict) -> ProjectResponse:
        """Create a project, then reload the list. Returns the created project."""
        try:
            created = to_project(await self._client.create_project(data))
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            logger.error(f"Error adding project: {e}")
            raise ProjectStoreError("Failed to create project") from e

        await self._reload()
        return created

    async def update_project(self, project_id: int, updates: dict):
        """Update the project with this id, then reload the list."""
        slug = self._slug_for(project_id)
        try:
            await self._client.update_project(slug, updates)
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error updating project: {e}")
            raise ProjectStoreError("Failed to update project") from e

        await self._reload()

    async def delete_project(self, project_id: int):
        """Delete the project with this id, then reload the list."""
        slug = self._slug_for(project_id)
        try:
            await self._client.delete_project(slug)
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error deleting project: {e}")
            raise ProjectStoreError("Failed to delete project") from e

        await self._reload()

    async def reset_to_seed_data(self):
        """Reset the server to seed data and reload. `loading` is always cleared."""
        self.loading = True
        self._notify()
        try:
            await self._client.reset()
            await self._reload()
            if self.error is None:
                logger.info("Database reset to seed data successfully")
            else:
                logger.warning("Database reset, but reloading projects failed")
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error resetting to seed data: {e}")
            raise ProjectStoreError("Failed to reset database") from e
        finally:
            self.loading = False
            self._notify()

    # ──────────────────────────────────────────────────────────────────────
    # Derived views
    # ──────────────────────────────────────────────────────────────────────

    def get_project_by_slug(self, slug: str) -> Optional[ProjectResponse]:
        return views.find_by_slug(self.projects, slug)

    def get_featured_projects(self) -> list[ProjectResponse]:
        return views.featured_projects(self.projects)

    def get_projects_by_category(self, category: str) -> list[ProjectResponse]:
        return views.projects_by_category(self.projects, category)
