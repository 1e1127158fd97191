"""Static registry mapping (HTTP method, GET return type) to the files to generate.

The table is the single source of truth for which directories exist for a
feature and which template each file is rendered from.  Supporting a new
method or return shape means adding an entry to ``_TABLE``; nothing in the
selector or generator branches on methods.

File name patterns use the same placeholder tokens as template content, so
``{{FeatureName}}Req.ts`` becomes ``OrderItemReq.ts`` when the plan is built.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import (
    DirectoryConfig,
    FileTemplateEntry,
    GetReturnType,
    HttpMethod,
    freeze_directory_config,
)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigurationError(Exception):
    """Raised when a method/return-type pair cannot be resolved to any files."""

    def __init__(self, method: HttpMethod | None, return_type: GetReturnType | None, message: str) -> None:
        self.method = method
        self.return_type = return_type
        super().__init__(message)


# ---------------------------------------------------------------------------
# Keys and profile
# ---------------------------------------------------------------------------


class RegistryKey(NamedTuple):
    method: HttpMethod
    return_type: Optional[GetReturnType] = None

    def describe(self) -> str:
        if self.return_type is None:
            return self.method.value.upper()
        return f"{self.method.value.upper()} ({self.return_type.value})"


class RegistryProfile(BaseModel):
    """Knobs that distinguish the generator variants.

    The two historical variants of the tool differed only in output file
    extensions and in whether GET/MODEL emits a request type.
    """

    model_config = ConfigDict(frozen=True)

    script_extension: str = Field(default="ts", min_length=1)
    ui_extension: str = Field(default="vue", min_length=1)
    get_model_requests: bool = Field(
        default=True,
        description="Include model/types/requests in the GET/MODEL directory set",
    )


# Directories pre-checked in the directory prompt, when available.
PREFERRED_DEFAULT_DIRECTORIES: tuple[str, ...] = (
    "api",
    "lib",
    "model/types",
    "model/types/requests",
    "model/types/responses",
    "ui",
)


# ---------------------------------------------------------------------------
# Table
# ---------------------------------------------------------------------------

# Entry kinds: (name pattern without extension, template id, is UI component).
# Template ids are fixed; the profile only changes the output extension.
_FILES: dict[str, tuple[str, str, bool]] = {
    "api": ("api-{{feature-name}}", "api-template.ts", False),
    "dto-to-req": ("map-{{feature-name}}-dto-to-req", "map-dto-to-req-template.ts", False),
    "rsp-to-dto": ("map-{{feature-name}}-rsp-to-dto", "map-rsp-to-dto-template.ts", False),
    "dto-factory": ("{{feature-name}}-dto-factory", "dto-factory-template.ts", False),
    "req": ("{{FeatureName}}Req", "req-template.ts", False),
    "rsp": ("{{FeatureName}}Rsp", "rsp-template.ts", False),
    "dto": ("{{FeatureName}}Dto", "dto-template.ts", False),
    "validation-rules": ("{{feature-name}}-validation-rules", "validation-rules-template.ts", False),
    "ui": ("{{FeatureName}}", "ui-template.vue", True),
    "test": ("{{feature-name}}.test", "test-template.ts", False),
}

_MUTATION_DIRECTORIES: dict[str, tuple[str, ...]] = {
    "api": ("api",),
    "lib": ("dto-to-req", "rsp-to-dto"),
    "model/factories": ("dto-factory",),
    "model/types/requests": ("req",),
    "model/types/responses": ("rsp",),
    "model/types": ("dto",),
    "model/validation-rules": ("validation-rules",),
    "ui": ("ui",),
    "__tests__": ("test",),
}

_GET_DIRECTORIES: dict[str, tuple[str, ...]] = {
    "api": ("api",),
    "lib": ("rsp-to-dto",),
    "model/types/requests": ("req",),
    "model/types/responses": ("rsp",),
    "model/types": ("dto",),
    "ui": ("ui",),
    "__tests__": ("test",),
}

_TABLE: dict[RegistryKey, dict[str, tuple[str, ...]]] = {
    RegistryKey(HttpMethod.POST): _MUTATION_DIRECTORIES,
    RegistryKey(HttpMethod.PUT): _MUTATION_DIRECTORIES,
    RegistryKey(HttpMethod.DELETE): {
        "api": ("api",),
        "model/types/requests": ("req",),
        "ui": ("ui",),
        "__tests__": ("test",),
    },
    RegistryKey(HttpMethod.GET, GetReturnType.MODEL): _GET_DIRECTORIES,
    RegistryKey(HttpMethod.GET, GetReturnType.COLLECTION): {
        "api": ("api",),
        "model/types/responses": ("rsp",),
        "model/types": ("dto",),
        "ui": ("ui",),
        "__tests__": ("test",),
    },
    RegistryKey(HttpMethod.GET, GetReturnType.PAGINATE): _GET_DIRECTORIES,
}


def _entry(kind: str, profile: RegistryProfile) -> FileTemplateEntry:
    stem, template, is_ui = _FILES[kind]
    extension = profile.ui_extension if is_ui else profile.script_extension
    return FileTemplateEntry(
        name_pattern=f"{stem}.{extension}",
        template_id=template,
    )


def _directory_config(
    key: RegistryKey, layout: Mapping[str, tuple[str, ...]], profile: RegistryProfile
) -> DirectoryConfig:
    directories = {
        directory: tuple(_entry(kind, profile) for kind in kinds)
        for directory, kinds in layout.items()
    }
    if key == (HttpMethod.GET, GetReturnType.MODEL) and not profile.get_model_requests:
        directories.pop("model/types/requests", None)
    return freeze_directory_config(directories)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TemplateRegistry:
    """Immutable lookup table from ``RegistryKey`` to ``DirectoryConfig``."""

    def __init__(self, table: Mapping[RegistryKey, DirectoryConfig]) -> None:
        self._table: Mapping[RegistryKey, DirectoryConfig] = MappingProxyType(dict(table))

    def keys(self) -> list[RegistryKey]:
        return list(self._table)

    def lookup(
        self, method: HttpMethod, return_type: GetReturnType | None = None
    ) -> DirectoryConfig:
        """Return the directory configuration for a method/return-type pair.

        Raises:
            ConfigurationError: GET without a return type, a return type on a
                non-GET method, or no (or an empty) entry for the pair.
        """
        if method is HttpMethod.GET and return_type is None:
            raise ConfigurationError(method, return_type, "No return type specified for GET method.")
        if method is not HttpMethod.GET and return_type is not None:
            raise ConfigurationError(
                method,
                return_type,
                f'Return type "{return_type.value}" is only valid for GET, not {method.value.upper()}.',
            )

        config = self._table.get(RegistryKey(method, return_type))
        if not config:
            raise ConfigurationError(
                method,
                return_type,
                f'No file configuration found for API method "{method.value}" '
                f'with return type "{return_type.value if return_type else None}".',
            )
        return config

    def available_directories(
        self, method: HttpMethod, return_type: GetReturnType | None = None
    ) -> list[str]:
        return list(self.lookup(method, return_type))


def build_registry(profile: RegistryProfile | None = None) -> TemplateRegistry:
    """Build the registry for *profile* (the default profile when omitted)."""
    profile = profile or RegistryProfile()
    return TemplateRegistry(
        {key: _directory_config(key, layout, profile) for key, layout in _TABLE.items()}
    )


def default_directories(
    available: Iterable[str],
    preferred: Iterable[str] = PREFERRED_DEFAULT_DIRECTORIES,
) -> list[str]:
    """Return the preferred directories that are available, in *available* order."""
    preferred_set = set(preferred)
    return [directory for directory in available if directory in preferred_set]
