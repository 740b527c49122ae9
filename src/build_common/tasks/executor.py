"""Build execution."""

from __future__ import annotations

import time
from collections.abc import Iterable

from build_common.errors import TaskExecutionError
from build_common.logging_config import TASK_PREFIX, get_logger
from build_common.models.task import BuildResult, TaskOutcome, TaskResult
from build_common.tasks.base import Task
from build_common.tasks.graph import TaskGraph
from build_common.tasks.history import TaskHistory, fingerprint

logger = get_logger(__name__)


class BuildExecutor:
    """Runs planned tasks in order, skipping those that are up-to-date.

    The first failing task stops the build: later tasks are not run and the
    failure is returned on the BuildResult. Fingerprints of tasks that
    succeeded are saved either way.

    Usage:
        executor = BuildExecutor(project.tasks, project.history)
        result = executor.execute(["build"])
    """

    def __init__(self, graph: TaskGraph, history: TaskHistory, rerun_tasks: bool = False):
        self.graph = graph
        self.history = history
        self.rerun_tasks = rerun_tasks

    def execute(self, requested: Iterable[str]) -> BuildResult:
        """Plan and run the requested tasks.

        Raises:
            UnknownTaskError: If a requested or referenced task does not exist
            TaskCycleError: If the tasks cannot be ordered
        """
        requested = list(requested)
        plan = self.graph.plan(requested)
        build = BuildResult(requested=requested)
        try:
            for task in plan:
                result = self._run_task(task, build)
                build.results.append(result)
                if result.outcome is TaskOutcome.FAILED:
                    break
        finally:
            self.history.save()

        return build

    def _run_task(self, task: Task, build: BuildResult) -> TaskResult:
        if not task.has_actions:
            worked = any(
                build.outcome_of(dependency) is TaskOutcome.SUCCESS
                for dependency in task.depends_on
            )
            outcome = TaskOutcome.SUCCESS if worked else TaskOutcome.SKIPPED
            logger.debug(f"{TASK_PREFIX}:{task.name} ({outcome.value})")
            return TaskResult(task_name=task.name, outcome=outcome, actionable=False)

        current = fingerprint(task)
        if not self.rerun_tasks and self.history.is_up_to_date(task, current):
            logger.info(f"{TASK_PREFIX}:{task.name} UP-TO-DATE")
            return TaskResult(task_name=task.name, outcome=TaskOutcome.UP_TO_DATE)

        logger.info(f"{TASK_PREFIX}:{task.name}")
        start_time = time.time()
        try:
            task.execute()
        except Exception as e:
            duration = time.time() - start_time
            self.history.forget(task.name)
            error = TaskExecutionError(task.name, str(e))
            error.__cause__ = e
            build.error = error
            logger.error(str(error))
            logger.debug("Traceback:", exc_info=e)
            return TaskResult(
                task_name=task.name,
                outcome=TaskOutcome.FAILED,
                duration_seconds=duration,
                message=str(e),
            )

        duration = time.time() - start_time
        if task.has_outputs:
            # inputs may be produced by earlier tasks, so fingerprint again
            self.history.record(task.name, fingerprint(task))
        return TaskResult(
            task_name=task.name, outcome=TaskOutcome.SUCCESS, duration_seconds=duration
        )
