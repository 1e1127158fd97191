"""Async client for fetching template text over HTTP.

Templates can be served as static files (a raw Git host, an internal asset
server, ...) laid out the same way as the bundled template tree.  The client
never raises: every failure is folded into a ``TemplateFetchResult`` so the
generator can fall back to the next candidate or write an empty file.

Typical usage::

    client = TemplateClient("https://example.com/templates/scaffold")
    result = await client.fetch("feature/post/api-template.ts")
    if result.found:
        print(result.text)
"""

from __future__ import annotations

import httpx
from pydantic import BaseModel, Field


class TemplateFetchResult(BaseModel):
    """Structured result of a single template fetch."""

    url: str = Field(default="", description="Absolute URL that was requested")
    text: str = Field(default="", description="Template body when found")
    status_code: int | None = Field(default=None, description="HTTP status, if a response arrived")
    found: bool = Field(default=False, description="Whether the template exists")
    error: str | None = Field(default=None, description="Error message on transport/HTTP failure")


class TemplateClient:
    """Fetches static template files relative to a base URL.

    Uses ``httpx.AsyncClient``; a fresh client is opened per fetch because a
    run performs only a handful of requests.
    """

    def __init__(self, base_url: str, timeout: float = 10.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout, connect=5.0),
            follow_redirects=True,
        )

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    async def fetch(self, path: str) -> TemplateFetchResult:
        """Fetch the template at *path* (relative to the base URL).

        A 404 means the template does not exist at this location and is not
        reported as an error.
        """
        url = self.url_for(path)
        try:
            async with self._client() as client:
                response = await client.get(f"/{path.lstrip('/')}")
                if response.status_code == 404:
                    return TemplateFetchResult(url=url, status_code=404)
                response.raise_for_status()
                return TemplateFetchResult(
                    url=url,
                    text=response.text,
                    status_code=response.status_code,
                    found=True,
                )
        except httpx.ConnectError:
            return TemplateFetchResult(
                url=url,
                error=f"Cannot connect to template host {self.base_url}.",
            )
        except httpx.TimeoutException:
            return TemplateFetchResult(
                url=url,
                error=f"Template request timed out after {self.timeout}s.",
            )
        except httpx.HTTPStatusError as exc:
            return TemplateFetchResult(
                url=url,
                status_code=exc.response.status_code,
                error=f"Template host returned HTTP {exc.response.status_code} for {url}",
            )
        except httpx.HTTPError as exc:
            return TemplateFetchResult(
                url=url,
                error=f"Failed to fetch template at {url}: {exc}",
            )
