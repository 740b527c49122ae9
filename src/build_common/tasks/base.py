"""Task base class."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from build_common.utils import ordered_union

Action = Callable[["Task"], None]


class Task:
    """A named unit of work in the build graph.

    A task declares what it reads (input files and properties) and what it
    writes (outputs) so the executor can skip it when nothing changed, and
    names the tasks it depends on or must follow.

    Usage:
        task = Task("check", description="Runs all checks.", group="verification")
        task.depends("test", "functionalTest")
        task.do_last(lambda t: ...)
    """

    def __init__(
        self,
        name: str,
        description: str = "",
        group: str | None = None,
    ):
        self.name = name
        self.description = description
        self.group = group
        self.depends_on: list[str] = []
        self.must_run_after: list[str] = []
        self.input_properties: dict[str, Any] = {}
        self.outputs: list[Path] = []
        self.actions: list[Action] = []
        self._input_providers: list[Callable[[], Iterable[Path]]] = []

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"

    def depends(self, *names: str) -> Task:
        for name in names:
            if name not in self.depends_on:
                self.depends_on.append(name)
        return self

    def runs_after(self, *names: str) -> Task:
        for name in names:
            if name not in self.must_run_after:
                self.must_run_after.append(name)
        return self

    def input_files(self, provider: Callable[[], Iterable[Path]]) -> Task:
        """Declare input files; the provider is evaluated at execution time."""
        self._input_providers.append(provider)
        return self

    def input_property(self, key: str, value: Any) -> Task:
        self.input_properties[key] = value
        return self

    def output_dir(self, path: Path) -> Task:
        self.outputs.append(path)
        return self

    def do_first(self, action: Action) -> Task:
        self.actions.insert(0, action)
        return self

    def do_last(self, action: Action) -> Task:
        self.actions.append(action)
        return self

    def resolve_inputs(self) -> list[Path]:
        return ordered_union(*(provider() for provider in self._input_providers))

    @property
    def has_outputs(self) -> bool:
        return bool(self.outputs)

    @property
    def has_actions(self) -> bool:
        return bool(self.actions)

    def execute(self) -> None:
        """Run every action in order. Exceptions propagate."""
        for action in self.actions:
            action(self)
