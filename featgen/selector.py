"""Interactive prompts that turn user answers into a ``GenerationRequest``.

Every prompt goes through ``ask_until_valid``: the raw answer is handed to a
parse callable that either returns the accepted value or raises
``ValueError`` with the message shown before asking again.  Prompts are
issued through ``rich.prompt.Prompt.ask`` by default; tests inject a
scripted ``ask`` callable instead.
"""

from __future__ import annotations

import re
from typing import Callable, Iterable, Sequence, TypeVar

from rich.console import Console
from rich.prompt import Prompt

from featgen.config import ScaffoldConfig
from featgen.scaffolder.models import GenerationRequest, GetReturnType, HttpMethod, RootOption
from featgen.scaffolder.registry import TemplateRegistry, default_directories
from featgen.utils import (
    console as default_console,
    is_kebab_case,
    is_kebab_case_path,
    print_error,
    split_path_segments,
)

T = TypeVar("T")

AskFn = Callable[..., str]

PARENT_DIR_ERROR = (
    "Directory path must be in kebab-case (e.g., 'my-parent-dir/sub-dir'). Please try again."
)
FEATURE_NAME_ERROR = (
    "Feature name must be in kebab-case (e.g., 'my-feature-name'). Please try again."
)
DIRECTORY_SELECTION_ERROR = (
    "Select at least one directory by number or name (e.g., '1 3 4'), or 'all'."
)

METHOD_ORDER: tuple[HttpMethod, ...] = (
    HttpMethod.POST,
    HttpMethod.GET,
    HttpMethod.PUT,
    HttpMethod.DELETE,
)


# ---------------------------------------------------------------------------
# Retry loop
# ---------------------------------------------------------------------------


def ask_until_valid(ask: Callable[[], str], parse: Callable[[str], T]) -> T:
    """Ask until *parse* accepts the answer.

    *parse* raises ``ValueError`` to reject an answer; its message is printed
    and the question is asked again.  There is no attempt limit.
    """
    while True:
        raw = ask()
        try:
            return parse(raw)
        except ValueError as exc:
            print_error(str(exc))


# ---------------------------------------------------------------------------
# Parsers
# ---------------------------------------------------------------------------


def parse_parent_dir(raw: str, root_paths: Sequence[str]) -> tuple[str, ...]:
    """Normalise the subdirectory answer into path segments.

    A leading ``<root path>/`` prefix is stripped.  An empty answer, or one
    equal to a root path, means "no subdirectory".
    """
    value = raw.strip()
    if not value or value in root_paths:
        return ()
    if root_paths:
        alternatives = "|".join(re.escape(p) for p in sorted(root_paths, key=len, reverse=True))
        value = re.sub(rf"^(?:{alternatives})/", "", value, count=1)
    if not value:
        return ()
    if not is_kebab_case_path(value, allow_underscore_prefix=True):
        raise ValueError(PARENT_DIR_ERROR)
    return tuple(split_path_segments(value))


def parse_feature_name(raw: str) -> str:
    value = raw.strip()
    if not is_kebab_case(value):
        raise ValueError(FEATURE_NAME_ERROR)
    return value


def parse_choice(raw: str, options: Sequence[tuple[str, T]]) -> T:
    """Accept a 1-based number, an option label, or the option value."""
    value = raw.strip()
    if value.isdigit() and 1 <= int(value) <= len(options):
        return options[int(value) - 1][1]
    for label, option in options:
        if value in (label, str(getattr(option, "value", option))):
            return option
    raise ValueError(f"Invalid choice {value!r}. Enter a number between 1 and {len(options)}.")


def parse_directory_selection(
    raw: str, available: Sequence[str], defaults: Sequence[str]
) -> list[str]:
    """Parse a multi-select answer into directories, in *available* order.

    Blank keeps the pre-checked defaults, ``all`` selects everything,
    otherwise numbers and/or directory names separated by spaces or commas.
    """
    value = raw.strip()
    if not value:
        chosen = set(defaults)
    elif value.lower() == "all":
        chosen = set(available)
    else:
        chosen = set()
        for token in re.split(r"[\s,]+", value):
            if token.isdigit() and 1 <= int(token) <= len(available):
                chosen.add(available[int(token) - 1])
            elif token in available:
                chosen.add(token)
            else:
                raise ValueError(f"Unknown directory {token!r}. {DIRECTORY_SELECTION_ERROR}")
    selected = [d for d in available if d in chosen]
    if not selected:
        raise ValueError(DIRECTORY_SELECTION_ERROR)
    return selected


# ---------------------------------------------------------------------------
# Selector
# ---------------------------------------------------------------------------


class InteractiveSelector:
    """Runs the prompt sequence of one scaffolding session."""

    def __init__(
        self,
        config: ScaffoldConfig,
        registry: TemplateRegistry,
        ask: AskFn | None = None,
        console: Console | None = None,
    ) -> None:
        self.config = config
        self.registry = registry
        self.ask = ask or Prompt.ask
        self.console = console or default_console

    def select(self) -> GenerationRequest:
        """Prompt for every answer and return the resulting request.

        Raises:
            ConfigurationError: The registry has no (or an empty) entry for
                the chosen method/return type.
        """
        root = self.select_root()
        parent_dir = self.ask_parent_dir(root)
        feature_name = self.ask_feature_name()
        method = self.select_method()
        return_type = self.select_return_type() if method is HttpMethod.GET else None

        directory_config = self.registry.lookup(method, return_type)
        selected = self.select_directories(list(directory_config))

        return GenerationRequest(
            root=root,
            parent_dir=parent_dir,
            feature_name=feature_name,
            http_method=method,
            get_return_type=return_type,
            selected_directories=tuple(selected),
        )

    # -- Individual prompts ------------------------------------------------

    def select_root(self) -> RootOption:
        options = [(root.label, root) for root in self.config.roots]
        return self._select("Select root directory", options)

    def ask_parent_dir(self, root: RootOption) -> tuple[str, ...]:
        root_paths = self.config.root_paths
        return ask_until_valid(
            lambda: self.ask(
                "Enter subdirectory (optional)",
                default=f"{root.path}/",
                console=self.console,
            ),
            lambda raw: parse_parent_dir(raw, root_paths),
        )

    def ask_feature_name(self) -> str:
        return ask_until_valid(
            lambda: self.ask("Enter feature name (kebab-case only)", console=self.console),
            parse_feature_name,
        )

    def select_method(self) -> HttpMethod:
        options = [(m.value, m) for m in METHOD_ORDER]
        return self._select("Select the API route method", options)

    def select_return_type(self) -> GetReturnType:
        options = [(rt.value, rt) for rt in GetReturnType]
        return self._select("Select the GET action return type", options)

    def select_directories(self, available: list[str]) -> list[str]:
        defaults = default_directories(available, self.config.preferred_directories)
        self.console.print("[bold]Select the directories to include for this feature:[/bold]")
        for index, directory in enumerate(available, 1):
            mark = "x" if directory in defaults else " "
            self.console.print(f"  {index}) \\[{mark}] {directory}")
        return ask_until_valid(
            lambda: self.ask(
                "Numbers or names separated by spaces, 'all', or Enter for the checked ones",
                default="",
                show_default=False,
                console=self.console,
            ),
            lambda raw: parse_directory_selection(raw, available, defaults),
        )

    # -- Helpers -----------------------------------------------------------

    def _select(self, message: str, options: Iterable[tuple[str, T]]) -> T:
        options = list(options)
        self.console.print(f"[bold]{message}:[/bold]")
        for index, (label, _value) in enumerate(options, 1):
            self.console.print(f"  {index}) {label}")
        return ask_until_valid(
            lambda: self.ask("Enter number", default="1", console=self.console),
            lambda raw: parse_choice(raw, options),
        )
