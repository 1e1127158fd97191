"""Feature file materializer.

Takes a ``GenerationRequest``, plans the files from the registry, and writes
them under ``<base_dir>/<root>/<parent...>/<feature>/<directory>/``.  Files
that already exist are never touched, so running the generator twice with
the same answers is a no-op the second time.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from featgen.utils import ensure_dir, print_error, print_info, print_success, print_warning

from .models import (
    DirectoryConfig,
    FileOutcome,
    FileStatus,
    GenerationReport,
    GenerationRequest,
    PlaceholderContext,
    ResolvedFile,
)
from .registry import TemplateRegistry, build_registry
from .templates import LocalTemplateSource, TemplateResolver, render_placeholders


# ---------------------------------------------------------------------------
# Planning
# ---------------------------------------------------------------------------


def plan_files(
    request: GenerationRequest, directory_config: DirectoryConfig
) -> list[ResolvedFile]:
    """Return the files to write for the selected directories, in registry order.

    Selected directories that the configuration does not know are ignored.
    """
    selected = set(request.selected_directories)
    context = PlaceholderContext.from_request(request)
    files: list[ResolvedFile] = []
    for directory, entries in directory_config.items():
        if directory not in selected:
            continue
        for entry in entries:
            files.append(
                ResolvedFile(
                    directory=directory,
                    file_name=render_placeholders(entry.name_pattern, context),
                    template_id=entry.template_id,
                )
            )
    return files


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


class FeatureGenerator:
    """Writes the files of one feature, one file at a time."""

    def __init__(
        self,
        registry: TemplateRegistry | None = None,
        resolver: TemplateResolver | None = None,
        base_dir: str | Path = ".",
    ) -> None:
        self.registry = registry or build_registry()
        self.resolver = resolver or TemplateResolver(LocalTemplateSource())
        self.base_dir = Path(base_dir)

    # -- Public API --------------------------------------------------------

    def feature_dir(self, request: GenerationRequest) -> Path:
        return self.base_dir / request.target_dir

    async def generate(self, request: GenerationRequest) -> GenerationReport:
        """Materialize every planned file of *request*.

        Raises:
            ConfigurationError: The registry has nothing for the request's
                method/return type.  Raised before anything is written.
        """
        directory_config = self.registry.lookup(request.http_method, request.get_return_type)
        files = plan_files(request, directory_config)
        context = PlaceholderContext.from_request(request)
        feature_dir = self.feature_dir(request)

        report = GenerationReport(feature_dir=str(feature_dir))
        for resolved in files:
            report.add(await self._materialize(request, resolved, context, feature_dir))
        return report

    # -- Per-file processing -----------------------------------------------

    async def _materialize(
        self,
        request: GenerationRequest,
        resolved: ResolvedFile,
        context: PlaceholderContext,
        feature_dir: Path,
    ) -> FileOutcome:
        dir_path = feature_dir / resolved.directory
        file_path = dir_path / resolved.file_name

        try:
            await asyncio.to_thread(ensure_dir, dir_path)

            if await asyncio.to_thread(file_path.exists):
                print_info(f'File "{file_path}" already exists, skipping.')
                return FileOutcome(
                    path=str(file_path),
                    status=FileStatus.SKIPPED,
                    template_id=resolved.template_id,
                    message="already exists",
                )

            template = await self.resolver.resolve(
                resolved.template_id, request.http_method, request.get_return_type
            )
            if template is None:
                print_warning(
                    f'Template "{resolved.template_id}" not found. Creating empty file: {file_path}'
                )
                await asyncio.to_thread(_write_file, file_path, "")
                return FileOutcome(
                    path=str(file_path),
                    status=FileStatus.CREATED_EMPTY,
                    template_id=resolved.template_id,
                    message="template not found",
                )

            content = render_placeholders(template.text, context)
            await asyncio.to_thread(_write_file, file_path, content)
            print_success(f"Created file: {file_path}")
            return FileOutcome(
                path=str(file_path),
                status=FileStatus.CREATED,
                template_id=resolved.template_id,
                template_path=template.location,
            )
        except OSError as exc:
            print_error(f'Error creating file "{file_path}": {exc}')
            return FileOutcome(
                path=str(file_path),
                status=FileStatus.FAILED,
                template_id=resolved.template_id,
                message=str(exc),
            )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _write_file(path: Path, content: str) -> None:
    """Write *content*, refusing to replace a file that appeared meanwhile."""
    with path.open("x", encoding="utf-8") as handle:
        handle.write(content)
