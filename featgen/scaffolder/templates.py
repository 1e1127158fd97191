"""Template lookup and placeholder substitution.

Templates live in a tree addressed by logical paths::

    feature/<method>/<return_type>/<template_id>   (GET only)
    feature/<method>/<template_id>
    feature/<template_id>                          (shared fallback)

``TemplateResolver`` tries these candidates in order against a template
source and returns the first hit.  Sources either read an on-disk tree
through a Jinja2 ``FileSystemLoader`` (raw source, never rendered: templates
are written against the four literal placeholder tokens, not Jinja syntax) or
fetch static files over HTTP.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional, Protocol

from jinja2 import Environment, FileSystemLoader, TemplateNotFound
from pydantic import BaseModel

from featgen.template_client import TemplateClient
from featgen.utils import print_warning

from .models import GetReturnType, HttpMethod, PlaceholderContext


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

TEMPLATE_NAMESPACE = "feature"


# ---------------------------------------------------------------------------
# Placeholder protocol
# ---------------------------------------------------------------------------


def render_placeholders(text: str, context: PlaceholderContext) -> str:
    """Replace every occurrence of each placeholder token in *text*.

    The four tokens are textually disjoint, so the order of replacement does
    not matter.  Text without tokens is returned unchanged.
    """
    for token, value in context.replacements().items():
        text = text.replace(token, value)
    return text


def candidate_paths(
    template_id: str,
    method: HttpMethod,
    return_type: GetReturnType | None = None,
) -> list[str]:
    """Return the logical template paths to try, most specific first."""
    candidates: list[str] = []
    if return_type is not None:
        candidates.append(f"{TEMPLATE_NAMESPACE}/{method.value}/{return_type.value}/{template_id}")
    candidates.append(f"{TEMPLATE_NAMESPACE}/{method.value}/{template_id}")
    candidates.append(f"{TEMPLATE_NAMESPACE}/{template_id}")
    return candidates


# ---------------------------------------------------------------------------
# Sources
# ---------------------------------------------------------------------------


class TemplateSource(Protocol):
    """Anything that can return template text for a logical path."""

    def describe(self, logical_path: str) -> str:
        ...

    async def fetch(self, logical_path: str) -> Optional[str]:
        ...


class LocalTemplateSource:
    """Reads templates from an on-disk tree via a Jinja2 loader."""

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.loader = FileSystemLoader(str(self.template_dir), encoding="utf-8")
        self.env = Environment(loader=self.loader, keep_trailing_newline=True)

    def describe(self, logical_path: str) -> str:
        return str(self.template_dir / logical_path)

    def _read(self, logical_path: str) -> Optional[str]:
        try:
            source, _filename, _uptodate = self.loader.get_source(self.env, logical_path)
        except TemplateNotFound:
            return None
        except UnicodeDecodeError as exc:
            print_warning(
                f'Template "{self.describe(logical_path)}" is not valid UTF-8, ignoring it: {exc}'
            )
            return None
        return source

    async def fetch(self, logical_path: str) -> Optional[str]:
        return await asyncio.to_thread(self._read, logical_path)


class RemoteTemplateSource:
    """Fetches templates over HTTP; failures other than 404 are reported."""

    def __init__(self, client: TemplateClient) -> None:
        self.client = client

    def describe(self, logical_path: str) -> str:
        return self.client.url_for(logical_path)

    async def fetch(self, logical_path: str) -> Optional[str]:
        result = await self.client.fetch(logical_path)
        if result.error:
            print_warning(f"Error fetching template from {result.url}: {result.error}")
        return result.text if result.found else None


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------


class ResolvedTemplate(BaseModel):
    """Template text together with the location it was found at."""

    template_id: str
    location: str
    text: str


class TemplateResolver:
    """Resolves a template id to text, trying specific locations before shared ones."""

    def __init__(self, source: TemplateSource) -> None:
        self.source = source

    async def resolve(
        self,
        template_id: str,
        method: HttpMethod,
        return_type: GetReturnType | None = None,
    ) -> ResolvedTemplate | None:
        """Return the first candidate the source has, or ``None``."""
        for logical_path in candidate_paths(template_id, method, return_type):
            text = await self.source.fetch(logical_path)
            if text is not None:
                return ResolvedTemplate(
                    template_id=template_id,
                    location=self.source.describe(logical_path),
                    text=text,
                )
        return None
