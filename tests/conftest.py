"""Shared pytest fixtures for the featgen test suite.

Provides reusable fixtures for:
- Temporary base directories and template trees
- The default registry and configuration
- A factory for ``GenerationRequest`` objects
- A scripted replacement for ``rich.prompt.Prompt.ask``
- Mocked ``httpx.AsyncClient`` responses
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from featgen.config import DEFAULT_ROOTS, ScaffoldConfig
from featgen.scaffolder import (
    FeatureGenerator,
    GenerationRequest,
    GetReturnType,
    HttpMethod,
    LocalTemplateSource,
    TemplateRegistry,
    TemplateResolver,
    build_registry,
)


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def base_dir(tmp_path: Path) -> Path:
    """Temporary application root that features are generated into."""
    app_dir = tmp_path / "app"
    app_dir.mkdir()
    yield app_dir


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """A small on-disk template tree with one specific and one shared template."""
    root = tmp_path / "templates"
    (root / "feature" / "get" / "paginate").mkdir(parents=True)
    (root / "feature" / "post").mkdir(parents=True)
    (root / "feature" / "api-template.ts").write_text(
        "shared api for {{FeatureName}}\n", encoding="utf-8"
    )
    (root / "feature" / "get" / "paginate" / "api-template.ts").write_text(
        "paginated api for {{FeatureName}}\n", encoding="utf-8"
    )
    (root / "feature" / "post" / "req-template.ts").write_text(
        "export interface {{FeatureName}}Req {}\n", encoding="utf-8"
    )
    yield root


# ---------------------------------------------------------------------------
# Registry / config / generator
# ---------------------------------------------------------------------------

@pytest.fixture
def registry() -> TemplateRegistry:
    return build_registry()


@pytest.fixture
def scaffold_config(base_dir: Path) -> ScaffoldConfig:
    return ScaffoldConfig(base_dir=base_dir)


@pytest.fixture
def generator(registry: TemplateRegistry, base_dir: Path) -> FeatureGenerator:
    """Generator writing into ``base_dir`` with the bundled templates."""
    return FeatureGenerator(
        registry=registry,
        resolver=TemplateResolver(LocalTemplateSource()),
        base_dir=base_dir,
    )


@pytest.fixture
def make_request(registry: TemplateRegistry) -> Callable[..., GenerationRequest]:
    """Factory for requests; selects every available directory by default."""

    def _make(
        feature_name: str = "order-item",
        method: HttpMethod = HttpMethod.POST,
        return_type: GetReturnType | None = None,
        parent_dir: tuple[str, ...] = (),
        selected: tuple[str, ...] | None = None,
        root_index: int = 0,
    ) -> GenerationRequest:
        if selected is None:
            selected = tuple(registry.available_directories(method, return_type))
        return GenerationRequest(
            root=DEFAULT_ROOTS[root_index],
            parent_dir=parent_dir,
            feature_name=feature_name,
            http_method=method,
            get_return_type=return_type,
            selected_directories=selected,
        )

    return _make


# ---------------------------------------------------------------------------
# Prompt scripting
# ---------------------------------------------------------------------------

class ScriptedAsk:
    """Stands in for ``Prompt.ask``: returns queued answers and records prompts.

    An answer of ``None`` means "press Enter", i.e. return the prompt default.
    """

    def __init__(self, answers: list[str | None]) -> None:
        self.answers = list(answers)
        self.prompts: list[str] = []

    def __call__(self, prompt: str, **kwargs: Any) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {prompt!r}")
        answer = self.answers.pop(0)
        if answer is None:
            return kwargs.get("default", "")
        return answer


@pytest.fixture
def scripted_ask() -> Callable[[list[str | None]], ScriptedAsk]:
    return ScriptedAsk


# ---------------------------------------------------------------------------
# Mock httpx
# ---------------------------------------------------------------------------

def make_mock_http_client(
    get: AsyncMock | None = None,
) -> AsyncMock:
    """Build an ``httpx.AsyncClient`` stand-in usable as an async context manager."""
    mock_client = AsyncMock()
    mock_client.get = get or AsyncMock()
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    return mock_client


def make_mock_response(status_code: int = 200, text: str = "") -> MagicMock:
    mock_response = MagicMock()
    mock_response.status_code = status_code
    mock_response.text = text
    mock_response.raise_for_status = MagicMock()
    return mock_response


@pytest.fixture
def mock_http_client() -> Callable[..., AsyncMock]:
    return make_mock_http_client


@pytest.fixture
def mock_response() -> Callable[..., MagicMock]:
    return make_mock_response
