"""Exceptions raised by build-common.

Library code raises these; the CLI turns them into a logged error and a
non-zero exit status.
"""


class BuildCommonError(Exception):
    """Base class for all build-common errors."""


class ConfigurationError(BuildCommonError):
    """The convention file or a project setting is invalid."""


class UnknownTaskError(BuildCommonError):
    """A task name was requested or referenced but never registered.

    Attributes:
        name: The missing task name
        referenced_by: Task that referenced it, if any
    """

    def __init__(self, name: str, referenced_by: str | None = None) -> None:
        self.name = name
        self.referenced_by = referenced_by
        if referenced_by:
            message = f"Task '{name}' (referenced by '{referenced_by}') not found in project"
        else:
            message = f"Task '{name}' not found in project"
        super().__init__(message)


class DuplicateTaskError(BuildCommonError):
    """A task with the same name is already registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Cannot add task '{name}' as a task with that name already exists")


class TaskCycleError(BuildCommonError):
    """The requested tasks cannot be ordered because of a cycle.

    Attributes:
        tasks: Names of the tasks that form the cycle
    """

    def __init__(self, tasks: list[str]) -> None:
        self.tasks = tasks
        super().__init__(f"Circular dependency between the following tasks: {', '.join(tasks)}")


class TaskExecutionError(BuildCommonError):
    """A task action failed; the build stops at this task.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, task_name: str, reason: str) -> None:
        self.task_name = task_name
        self.reason = reason
        super().__init__(f"Execution failed for task ':{task_name}': {reason}")
