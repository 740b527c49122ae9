"""Build tasks, the task graph and its executor.

    from build_common.tasks import Task, TaskGraph, BuildExecutor
"""

from build_common.tasks.base import Task
from build_common.tasks.executor import BuildExecutor
from build_common.tasks.graph import TaskGraph
from build_common.tasks.history import TaskHistory

__all__ = [
    "Task",
    "TaskGraph",
    "TaskHistory",
    "BuildExecutor",
]
