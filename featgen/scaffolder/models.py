"""Pydantic v2 models for feature scaffolding.

Defines the request produced by the interactive selector, the registry entry
types, the per-file plan, the placeholder context, and the report returned
by the generator.
"""

from __future__ import annotations

from enum import Enum
from pathlib import PurePosixPath
from types import MappingProxyType
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from featgen.utils import (
    is_kebab_case,
    is_kebab_case_path,
    split_path_segments,
    to_camel_case,
    to_pascal_case,
)


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class HttpMethod(str, Enum):
    """HTTP method of the API call the feature wraps.

    The values double as template directory names.
    """
    GET = "get"
    POST = "post"
    PUT = "put"
    DELETE = "delete"


class GetReturnType(str, Enum):
    """Shape of the payload returned by a GET call."""
    MODEL = "model"
    COLLECTION = "collection"
    PAGINATE = "paginate"


class FileStatus(str, Enum):
    """Outcome of materializing a single file."""
    CREATED = "created"
    CREATED_EMPTY = "created_empty"
    SKIPPED = "skipped"
    FAILED = "failed"


# ---------------------------------------------------------------------------
# Registry entries
# ---------------------------------------------------------------------------

class FileTemplateEntry(BaseModel):
    """One file of a registry directory: output name pattern plus template id."""

    model_config = ConfigDict(frozen=True)

    name_pattern: str = Field(..., description="Output file name, may contain placeholder tokens")
    template_id: str = Field(..., description="Template file name looked up by the resolver")


DirectoryConfig = Mapping[str, tuple[FileTemplateEntry, ...]]


def freeze_directory_config(
    directories: Mapping[str, tuple[FileTemplateEntry, ...] | list[FileTemplateEntry]],
) -> DirectoryConfig:
    """Return a read-only, insertion-ordered copy of *directories*."""
    return MappingProxyType({d: tuple(entries) for d, entries in directories.items()})


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------

class RootOption(BaseModel):
    """A preconfigured base directory offered as the first prompt."""

    model_config = ConfigDict(frozen=True)

    label: str = Field(..., description="Text shown in the prompt, e.g. '@/features/'")
    alias: str = Field(..., description="Import alias prefix used for featurePath, e.g. '@/features'")
    path: str = Field(..., description="Directory relative to the base dir, e.g. 'src/features'")


class GenerationRequest(BaseModel):
    """Fully resolved answers of one interactive session."""

    model_config = ConfigDict(frozen=True)

    root: RootOption
    parent_dir: tuple[str, ...] = Field(default=())
    feature_name: str
    http_method: HttpMethod
    get_return_type: Optional[GetReturnType] = None
    selected_directories: tuple[str, ...] = Field(..., min_length=1)

    @field_validator("parent_dir")
    @classmethod
    def _check_parent_dir(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        for segment in value:
            if split_path_segments(segment) != [segment] or not is_kebab_case_path(
                segment, allow_underscore_prefix=True
            ):
                raise ValueError(f"Invalid parent directory segment: {segment!r}")
        return value

    @field_validator("feature_name")
    @classmethod
    def _check_feature_name(cls, value: str) -> str:
        if not is_kebab_case(value):
            raise ValueError(f"Feature name must be kebab-case, got {value!r}")
        return value

    @model_validator(mode="after")
    def _check_return_type(self) -> "GenerationRequest":
        if self.http_method is HttpMethod.GET and self.get_return_type is None:
            raise ValueError("A GET request needs a return type")
        if self.http_method is not HttpMethod.GET and self.get_return_type is not None:
            raise ValueError(
                f"Return type only applies to GET, not {self.http_method.value.upper()}"
            )
        return self

    @property
    def target_dir(self) -> PurePosixPath:
        """Feature directory relative to the base dir."""
        return PurePosixPath(self.root.path, *self.parent_dir, self.feature_name)

    @property
    def feature_path(self) -> str:
        """Logical import path of the feature, e.g. ``@/features/orders/order-item``."""
        parts = [self.root.alias.rstrip("/"), *self.parent_dir, self.feature_name]
        return "/".join(part for part in parts if part)


# ---------------------------------------------------------------------------
# Planning / rendering
# ---------------------------------------------------------------------------

class ResolvedFile(BaseModel):
    """A file planned for writing, with placeholders already substituted."""

    model_config = ConfigDict(frozen=True)

    directory: str
    file_name: str
    template_id: str

    @property
    def relative_path(self) -> PurePosixPath:
        return PurePosixPath(self.directory, self.file_name)


class PlaceholderContext(BaseModel):
    """Values substituted for the four placeholder tokens."""

    model_config = ConfigDict(frozen=True)

    feature_path: str
    feature_name_kebab: str
    feature_name_pascal: str
    feature_name_camel: str

    @classmethod
    def from_request(cls, request: GenerationRequest) -> "PlaceholderContext":
        return cls.for_feature(request.feature_name, request.feature_path)

    @classmethod
    def for_feature(cls, feature_name: str, feature_path: str = "") -> "PlaceholderContext":
        return cls(
            feature_path=feature_path,
            feature_name_kebab=feature_name,
            feature_name_pascal=to_pascal_case(feature_name),
            feature_name_camel=to_camel_case(feature_name),
        )

    def replacements(self) -> dict[str, str]:
        """Return the ``{token: value}`` mapping of the placeholder protocol."""
        return {
            "{{featurePath}}": self.feature_path,
            "{{feature-name}}": self.feature_name_kebab,
            "{{FeatureName}}": self.feature_name_pascal,
            "{{featureName}}": self.feature_name_camel,
        }


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------

class FileOutcome(BaseModel):
    """What happened to one planned file."""

    path: str
    status: FileStatus
    template_id: str = ""
    template_path: Optional[str] = None
    message: str = ""


class GenerationReport(BaseModel):
    """Collected outcomes of one generator run, in processing order."""

    feature_dir: str = ""
    outcomes: list[FileOutcome] = Field(default_factory=list)

    def add(self, outcome: FileOutcome) -> FileOutcome:
        self.outcomes.append(outcome)
        return outcome

    def with_status(self, *statuses: FileStatus) -> list[FileOutcome]:
        return [o for o in self.outcomes if o.status in statuses]

    @property
    def created(self) -> list[FileOutcome]:
        return self.with_status(FileStatus.CREATED, FileStatus.CREATED_EMPTY)

    @property
    def skipped(self) -> list[FileOutcome]:
        return self.with_status(FileStatus.SKIPPED)

    @property
    def failed(self) -> list[FileOutcome]:
        return self.with_status(FileStatus.FAILED)

    def summary(self) -> dict[str, str]:
        """Return a ``{label: count}`` mapping for ``print_summary_table``."""
        return {
            "Feature directory": self.feature_dir,
            "Created": str(len(self.with_status(FileStatus.CREATED))),
            "Created empty (no template)": str(len(self.with_status(FileStatus.CREATED_EMPTY))),
            "Skipped (already exist)": str(len(self.skipped)),
            "Failed": str(len(self.failed)),
        }
