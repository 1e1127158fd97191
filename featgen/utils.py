"""Shared utility functions for featgen.

Provides the kebab-case validators and case converters used for feature
names and directory paths, file-system helpers, and Rich-based console
reporting.  The string helpers are pure: invalid input yields ``False`` or an
unmodified string, never an exception.
"""

from __future__ import annotations

import re
from pathlib import Path

from rich.console import Console
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------

_KEBAB_RE = re.compile(r"[a-z]+(?:-[a-z]+)*")
_SEGMENT_SPLIT_RE = re.compile(r"[/\\]+")


def to_pascal_case(value: str) -> str:
    """Convert ``some-thing`` to ``SomeThing``.

    Uppercases the first character and every character that follows a
    hyphen, then drops the hyphens.  Input that is already PascalCase is
    returned unchanged.
    """
    return re.sub(r"(?:^|-)(\w)", lambda m: m.group(1).upper(), value)


def to_camel_case(value: str) -> str:
    """Convert ``some-thing`` to ``someThing``.

    The first character is left as it is.
    """
    converted = re.sub(r"-([a-z])", lambda m: m.group(1).upper(), value)
    return converted.replace("-", "")


def is_kebab_case(value: str) -> bool:
    """Return ``True`` if *value* is lowercase words joined by single hyphens.

    Examples::

        is_kebab_case("order-item") -> True
        is_kebab_case("order--item") -> False
        is_kebab_case("Order") -> False
    """
    return _KEBAB_RE.fullmatch(value) is not None


def split_path_segments(value: str) -> list[str]:
    """Split a path on ``/`` or ``\\`` and drop empty segments."""
    return [segment for segment in _SEGMENT_SPLIT_RE.split(value) if segment]


def is_kebab_case_path(value: str, allow_underscore_prefix: bool = False) -> bool:
    """Return ``True`` if every segment of a path is kebab-case.

    Args:
        value: Path using ``/`` or ``\\`` as separators.  Empty segments
            (doubled or trailing separators) are ignored.
        allow_underscore_prefix: Also accept segments made of ``_`` followed
            by a kebab-case word, e.g. ``_shared/order-list``.
    """
    segments = split_path_segments(value)
    if not segments:
        return False
    for segment in segments:
        if allow_underscore_prefix and segment.startswith("_"):
            segment = segment[1:]
        if not is_kebab_case(segment):
            return False
    return True


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Args:
        path: Directory path.

    Returns:
        The ``Path`` object for the directory.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")


def print_info(message: str) -> None:
    """Print a dim informational message."""
    console.print(f"[dim]{message}[/dim]")
