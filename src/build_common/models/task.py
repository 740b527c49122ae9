"""Task execution result models."""

from dataclasses import dataclass, field
from enum import Enum

import click

from build_common.logging_config import get_logger

logger = get_logger(__name__)


class TaskOutcome(Enum):
    """Outcome of a single task in a build.

    Values:
        SUCCESS: Task actions ran and completed
        UP_TO_DATE: Inputs unchanged and outputs present; actions not run
        SKIPPED: Task has no actions and nothing it depends on did work
        FAILED: An action raised; the build stopped here
    """

    SUCCESS = "success"
    UP_TO_DATE = "up-to-date"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class TaskResult:
    """Result of executing one task."""

    task_name: str
    """Name of the task"""

    outcome: TaskOutcome
    """What happened"""

    duration_seconds: float = 0.0
    """Wall time spent in the task's actions"""

    message: str | None = None
    """Failure reason or skip explanation"""

    actionable: bool = True
    """False for lifecycle tasks without actions of their own"""


@dataclass
class BuildResult:
    """Ordered results of a build invocation."""

    requested: list[str]
    """Task names requested on the command line"""

    results: list[TaskResult] = field(default_factory=list)
    """One entry per executed task, in execution order"""

    error: Exception | None = None
    """Failure that stopped the build, with the original exception as __cause__"""

    @property
    def success(self) -> bool:
        return all(r.outcome is not TaskOutcome.FAILED for r in self.results)

    @property
    def failed_task(self) -> TaskResult | None:
        for result in self.results:
            if result.outcome is TaskOutcome.FAILED:
                return result
        return None

    def count(self, outcome: TaskOutcome) -> int:
        return sum(1 for r in self.results if r.outcome is outcome)

    def outcome_of(self, task_name: str) -> TaskOutcome | None:
        for result in self.results:
            if result.task_name == task_name:
                return result.outcome
        return None

    def print_summary(self) -> None:
        """Log a short colored summary of the build."""
        actionable = [r for r in self.results if r.actionable]
        total = len(actionable)
        executed = sum(1 for r in actionable if r.outcome is not TaskOutcome.UP_TO_DATE)
        up_to_date = total - executed

        logger.info("")
        if self.success:
            logger.info(click.style("BUILD SUCCESSFUL", fg="green", bold=True))
        else:
            logger.error("BUILD FAILED")
        logger.info(f"{total} actionable tasks: {executed} executed, {up_to_date} up-to-date")
