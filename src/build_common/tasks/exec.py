"""Tasks that delegate to an external command (compiler, test runner, formatter)."""

from __future__ import annotations

import os
import shutil
import subprocess
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from build_common.config import COMMAND_TIMEOUT_SECONDS
from build_common.logging_config import get_logger
from build_common.tasks.base import Task

logger = get_logger(__name__)

LIST_PLACEHOLDERS = ("${compiler_args}",)
"""Placeholders that expand to several arguments when used alone"""


@dataclass
class CommandResult:
    """Result of running an external command."""

    success: bool
    exit_code: int | None
    stdout: str
    stderr: str
    duration_seconds: float
    error_message: str | None = None


def format_args(args: Sequence[str], values: dict[str, str | list[str]]) -> list[str]:
    """Substitute ``${name}`` placeholders in a command line.

    An argument that is exactly a list placeholder is replaced by all of
    its values; other placeholders are substituted inside the argument.
    """
    formatted: list[str] = []
    for arg in args:
        value = values.get(arg[2:-1]) if arg in LIST_PLACEHOLDERS else None
        if isinstance(value, list):
            formatted.extend(value)
            continue
        for key, replacement in values.items():
            if isinstance(replacement, list):
                replacement = " ".join(replacement)
            arg = arg.replace(f"${{{key}}}", replacement)
        formatted.append(arg)
    return formatted


def find_executable(command: str, cwd: Path) -> str | None:
    """Locate a command.

    A command containing a path separator (``./gradlew``, ``scripts/fmt.sh``)
    is taken relative to ``cwd``; a bare name is looked up on PATH.
    """
    if os.sep in command or (os.altsep and os.altsep in command):
        path = cwd / command
        if path.is_file() and os.access(path, os.X_OK):
            return str(path)
        return None
    return shutil.which(command)


def run_command(args: Sequence[str], cwd: Path, timeout: int = COMMAND_TIMEOUT_SECONDS) -> CommandResult:
    """Run a command and capture its output.

    Args:
        args: Command and arguments
        cwd: Working directory
        timeout: Maximum execution time in seconds

    Returns:
        CommandResult with execution details
    """
    if not args or not find_executable(args[0], cwd):
        name = args[0] if args else "<empty>"
        location = "PATH" if not args or Path(args[0]).name == args[0] else str(cwd)
        return CommandResult(
            success=False,
            exit_code=None,
            stdout="",
            stderr="",
            duration_seconds=0.0,
            error_message=f"{name} not found in {location}",
        )

    start_time = time.time()
    try:
        result = subprocess.run(
            list(args),
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        return CommandResult(
            success=False,
            exit_code=None,
            stdout="",
            stderr="",
            duration_seconds=time.time() - start_time,
            error_message=f"Timeout after {timeout} seconds",
        )

    return CommandResult(
        success=result.returncode == 0,
        exit_code=result.returncode,
        stdout=result.stdout,
        stderr=result.stderr,
        duration_seconds=time.time() - start_time,
    )


class ExecTask(Task):
    """Runs a configured command line.

    Placeholder values are computed when the task runs, so classpaths see
    everything registered up to that point.
    """

    def __init__(
        self,
        name: str,
        command: Sequence[str],
        cwd: Path,
        placeholders: Callable[[], dict[str, str | list[str]]] | None = None,
        description: str = "",
        group: str | None = None,
        timeout: int = COMMAND_TIMEOUT_SECONDS,
    ):
        super().__init__(name, description=description, group=group)
        self.command = list(command)
        self.cwd = cwd
        self.placeholders = placeholders or dict
        self.timeout = timeout
        self.last_result: CommandResult | None = None

        self.input_property("command", self.command)
        self.do_last(ExecTask.run)

    def command_line(self) -> list[str]:
        return format_args(self.command, self.placeholders())

    def run(self) -> None:
        """Execute the command.

        Raises:
            RuntimeError: If the command is missing, times out or exits non-zero
        """
        args = self.command_line()
        logger.debug(f"{self.name}: running {' '.join(args)}")
        result = run_command(args, cwd=self.cwd, timeout=self.timeout)
        self.last_result = result

        if result.stdout:
            logger.info(result.stdout.rstrip())
        if result.error_message:
            raise RuntimeError(result.error_message)
        if not result.success:
            details = result.stderr.strip() or result.stdout.strip()
            raise RuntimeError(f"{args[0]} finished with exit code {result.exit_code}\n{details}")
