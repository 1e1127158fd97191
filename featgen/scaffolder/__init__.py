"""featgen scaffolder -- generates the boilerplate files of a front-end feature.

The registry decides which directories and files a method/return-type pair
produces, the resolver finds template text for each file, and the generator
writes the files, skipping any that already exist.

Quick usage::

    from featgen.scaffolder import FeatureGenerator, GenerationRequest

    generator = FeatureGenerator(base_dir="/path/to/app")
    report = await generator.generate(request)
"""

from featgen.scaffolder.generator import FeatureGenerator, plan_files
from featgen.scaffolder.models import (
    FileStatus,
    GenerationReport,
    GenerationRequest,
    GetReturnType,
    HttpMethod,
    PlaceholderContext,
    ResolvedFile,
    RootOption,
)
from featgen.scaffolder.registry import (
    ConfigurationError,
    RegistryProfile,
    TemplateRegistry,
    build_registry,
    default_directories,
)
from featgen.scaffolder.templates import (
    LocalTemplateSource,
    RemoteTemplateSource,
    TemplateResolver,
    render_placeholders,
)

__all__ = [
    "ConfigurationError",
    "FeatureGenerator",
    "FileStatus",
    "GenerationReport",
    "GenerationRequest",
    "GetReturnType",
    "HttpMethod",
    "LocalTemplateSource",
    "PlaceholderContext",
    "RegistryProfile",
    "RemoteTemplateSource",
    "ResolvedFile",
    "RootOption",
    "TemplateRegistry",
    "TemplateResolver",
    "build_registry",
    "default_directories",
    "plan_files",
    "render_placeholders",
]
