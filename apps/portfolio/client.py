"""
Portfolio API client wrapper
"""
import os
import logging
from typing import Any, Optional
import httpx

logger = logging.getLogger(__name__)

BASE_URL = os.getenv("PORTFOLIO_API_URL", "http://localhost:8000")
TIMEOUT = float(os.getenv("PORTFOLIO_API_TIMEOUT", "10"))


class PortfolioClient:
    """
    Async client for the Portfolio API.

    Every call raises httpx.HTTPError on transport failure or a non-2xx
    response, and ValueError when a 2xx body is not JSON, after logging
    which operation failed. Pass `http` to reuse an
    existing AsyncClient (tests hand in one bound to the ASGI app).
    """

    def __init__(self, base_url: str = BASE_URL, http: Optional[httpx.AsyncClient] = None):
        self._http = http or httpx.AsyncClient(base_url=base_url, timeout=TIMEOUT)

    async def aclose(self):
        await self._http.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def _request(self, operation: str, method: str, url: str, **kwargs) -> Any:
        try:
            response = await self._http.request(method, url, **kwargs)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Portfolio API call failed ({operation}): {e}")
            raise

    async def list_projects(self) -> list[dict]:
        return await self._request("list projects", "GET", "/projects")

    async def get_project(self, slug: str) -> dict:
        return await self._request("get project", "GET", f"/projects/{slug}")

    async def create_project(self, data: dict) -> dict:
        return await self._request("create project", "POST", "/projects", json=data)

    async def update_project(self, slug: str, updates: dict) -> dict:
        return await self._request("update project", "PUT", f"/projects/{slug}", json=updates)

    async def delete_project(self, slug: str) -> dict:
        return await self._request("delete project", "DELETE", f"/projects/{slug}")

    async def reset(self) -> dict:
        """Wipe the store and reload seed data. Returns the counts."""
        return await self._request("reset", "POST", "/projects/reset")

    async def list_skills(self) -> list[dict]:
        return await self._request("list skills", "GET", "/skills")

    async def create_skill(self, data: dict) -> dict:
        return await self._request("create skill", "POST", "/skills", json=data)
