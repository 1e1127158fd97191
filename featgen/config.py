"""featgen configuration.

Typed configuration for a scaffolding run: where files are written, which
root directories are offered, where templates come from, and which registry
profile is used.  All settings are Pydantic v2 models so they can be
validated at construction time and loaded from JSON or environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

from featgen.scaffolder.models import RootOption
from featgen.scaffolder.registry import PREFERRED_DEFAULT_DIRECTORIES, RegistryProfile
from featgen.scaffolder.templates import (
    DEFAULT_TEMPLATE_DIR,
    LocalTemplateSource,
    RemoteTemplateSource,
    TemplateSource,
)
from featgen.template_client import TemplateClient


DEFAULT_ROOTS: tuple[RootOption, ...] = (
    RootOption(label="@/features/", alias="@/features", path="src/features"),
    RootOption(label="@/shared/features", alias="@/shared/features", path="src/shared/features"),
    RootOption(label="@/", alias="@", path="src"),
)


class TemplateSourceConfig(BaseModel):
    """Where template text is read from."""

    kind: Literal["bundled", "local", "remote"] = Field(default="bundled")
    directory: Path | None = Field(
        default=None, description="Template tree root for kind='local'"
    )
    base_url: str | None = Field(
        default=None, description="Base URL of the template tree for kind='remote'"
    )
    timeout: float = Field(default=10.0, gt=0, description="Per-request timeout in seconds")

    @model_validator(mode="after")
    def _check_location(self) -> "TemplateSourceConfig":
        if self.kind == "local" and self.directory is None:
            raise ValueError("A local template source needs 'directory'")
        if self.kind == "remote" and not self.base_url:
            raise ValueError("A remote template source needs 'base_url'")
        return self


class ScaffoldConfig(BaseModel):
    """Global featgen configuration.

    Created once by the CLI entry point and passed to the selector and the
    generator.
    """

    base_dir: Path = Field(default=Path("."))
    roots: list[RootOption] = Field(default_factory=lambda: list(DEFAULT_ROOTS), min_length=1)
    templates: TemplateSourceConfig = Field(default_factory=TemplateSourceConfig)
    profile: RegistryProfile = Field(default_factory=RegistryProfile)
    preferred_directories: list[str] = Field(
        default_factory=lambda: list(PREFERRED_DEFAULT_DIRECTORIES)
    )

    # ------------------------------------------------------------------
    # Derived objects
    # ------------------------------------------------------------------

    @property
    def root_paths(self) -> list[str]:
        return [root.path for root in self.roots]

    def build_template_source(self) -> TemplateSource:
        """Return the template source described by ``templates``."""
        if self.templates.kind == "remote":
            client = TemplateClient(self.templates.base_url or "", timeout=self.templates.timeout)
            return RemoteTemplateSource(client)
        if self.templates.kind == "local":
            return LocalTemplateSource(self.templates.directory)
        return LocalTemplateSource(DEFAULT_TEMPLATE_DIR)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "ScaffoldConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "ScaffoldConfig":
        """Build a ``ScaffoldConfig`` from environment variables.

        Recognised variables (all optional):
            FEATGEN_BASE_DIR, FEATGEN_TEMPLATE_SOURCE, FEATGEN_TEMPLATE_DIR,
            FEATGEN_TEMPLATE_URL, FEATGEN_TEMPLATE_TIMEOUT,
            FEATGEN_SCRIPT_EXTENSION, FEATGEN_UI_EXTENSION,
            FEATGEN_GET_MODEL_REQUESTS.
        """
        template_kwargs: dict[str, Any] = {}
        if os.environ.get("FEATGEN_TEMPLATE_DIR"):
            template_kwargs["kind"] = "local"
            template_kwargs["directory"] = Path(os.environ["FEATGEN_TEMPLATE_DIR"])
        if os.environ.get("FEATGEN_TEMPLATE_URL"):
            template_kwargs["kind"] = "remote"
            template_kwargs["base_url"] = os.environ["FEATGEN_TEMPLATE_URL"]
        if os.environ.get("FEATGEN_TEMPLATE_SOURCE"):
            template_kwargs["kind"] = os.environ["FEATGEN_TEMPLATE_SOURCE"]
        if os.environ.get("FEATGEN_TEMPLATE_TIMEOUT"):
            template_kwargs["timeout"] = float(os.environ["FEATGEN_TEMPLATE_TIMEOUT"])

        profile_kwargs: dict[str, Any] = {}
        if os.environ.get("FEATGEN_SCRIPT_EXTENSION"):
            profile_kwargs["script_extension"] = os.environ["FEATGEN_SCRIPT_EXTENSION"]
        if os.environ.get("FEATGEN_UI_EXTENSION"):
            profile_kwargs["ui_extension"] = os.environ["FEATGEN_UI_EXTENSION"]
        if os.environ.get("FEATGEN_GET_MODEL_REQUESTS"):
            profile_kwargs["get_model_requests"] = os.environ[
                "FEATGEN_GET_MODEL_REQUESTS"
            ].strip().lower() in ("1", "true", "yes", "on")

        return cls(
            base_dir=Path(os.environ.get("FEATGEN_BASE_DIR", ".")),
            templates=TemplateSourceConfig(**template_kwargs),
            profile=RegistryProfile(**profile_kwargs),
        )
