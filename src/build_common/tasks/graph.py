"""Task graph and execution planning.

Tasks are linked by two kinds of edges:

- ``depends_on``: the dependency is pulled into the plan and runs first
- ``must_run_after``: ordering only; applies when both tasks are planned

``plan()`` collects the requested tasks and their transitive dependencies
and orders them topologically. Among tasks that are ready at the same time
the one discovered first wins (requested order, then dependencies by name),
so the same request always yields the same plan.
"""

from __future__ import annotations

import heapq
from collections.abc import Iterable

from build_common.errors import DuplicateTaskError, TaskCycleError, UnknownTaskError
from build_common.logging_config import get_logger
from build_common.tasks.base import Task

logger = get_logger(__name__)


class TaskGraph:
    """Registry of tasks plus the precedence edges between them."""

    def __init__(self):
        self._tasks: dict[str, Task] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._tasks

    def __len__(self) -> int:
        return len(self._tasks)

    def register(self, task: Task) -> Task:
        """Add a task.

        Raises:
            DuplicateTaskError: If a task with the same name exists
        """
        if task.name in self._tasks:
            raise DuplicateTaskError(task.name)
        self._tasks[task.name] = task
        logger.debug(f"Registered task: {task.name}")
        return task

    def get(self, name: str, referenced_by: str | None = None) -> Task:
        try:
            return self._tasks[name]
        except KeyError:
            raise UnknownTaskError(name, referenced_by) from None

    def find(self, name: str) -> Task | None:
        return self._tasks.get(name)

    @property
    def tasks(self) -> list[Task]:
        """All tasks sorted by name."""
        return [self._tasks[name] for name in sorted(self._tasks)]

    def plan(self, requested: Iterable[str]) -> list[Task]:
        """Order the requested tasks and their dependencies for execution.

        Raises:
            UnknownTaskError: If a requested or referenced task does not exist
            TaskCycleError: If the tasks cannot be ordered
        """
        discovered = self._discover(list(requested))
        index = {name: i for i, name in enumerate(discovered)}

        successors: dict[str, list[str]] = {name: [] for name in discovered}
        in_degree = dict.fromkeys(discovered, 0)
        for name in discovered:
            task = self._tasks[name]
            predecessors = list(task.depends_on)
            for other in task.must_run_after:
                self.get(other, referenced_by=name)
                if other in index:
                    predecessors.append(other)
            for predecessor in set(predecessors):
                successors[predecessor].append(name)
                in_degree[name] += 1

        ready = [(index[name], name) for name in discovered if in_degree[name] == 0]
        heapq.heapify(ready)
        ordered: list[Task] = []
        while ready:
            _, name = heapq.heappop(ready)
            ordered.append(self._tasks[name])
            for successor in successors[name]:
                in_degree[successor] -= 1
                if in_degree[successor] == 0:
                    heapq.heappush(ready, (index[successor], successor))

        if len(ordered) != len(discovered):
            remaining = {name for name, degree in in_degree.items() if degree > 0}
            raise TaskCycleError(self._find_cycle(remaining))

        return ordered

    def _discover(self, requested: list[str]) -> list[str]:
        """Requested tasks and transitive dependencies in depth-first discovery order."""
        discovered: list[str] = []
        seen: set[str] = set()
        stack: list[tuple[str, str | None]] = [(name, None) for name in reversed(requested)]

        while stack:
            name, referenced_by = stack.pop()
            if name in seen:
                continue
            task = self.get(name, referenced_by)
            seen.add(name)
            discovered.append(name)
            for dependency in sorted(task.depends_on, reverse=True):
                stack.append((dependency, name))

        return discovered

    def _find_cycle(self, remaining: set[str]) -> list[str]:
        """Walk predecessors inside the unresolved set until a task repeats."""
        predecessors = {
            name: sorted(
                p
                for p in (*self._tasks[name].depends_on, *self._tasks[name].must_run_after)
                if p in remaining
            )
            for name in remaining
        }
        path: list[str] = []
        current = min(remaining)
        while current not in path:
            path.append(current)
            current = predecessors[current][0]
        cycle = path[path.index(current) :]
        cycle.reverse()
        return [*cycle, cycle[0]]
