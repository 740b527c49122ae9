"""Project: layout, configurations, source sets and the task graph."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

from build_common.classpath.manifest import classpath_manifest_path
from build_common.classpath.resolver import ConfigurationContainer
from build_common.config import STATE_DIR, TASK_HISTORY_FILE
from build_common.errors import ConfigurationError
from build_common.logging_config import get_logger
from build_common.models.convention import Convention
from build_common.models.source_set import SourceSet
from build_common.models.task import BuildResult
from build_common.tasks.base import Task
from build_common.tasks.exec import ExecTask
from build_common.tasks.executor import BuildExecutor
from build_common.tasks.graph import TaskGraph
from build_common.tasks.history import TaskHistory

logger = get_logger(__name__)


class Project:
    """A configured project.

    The convention is read once and shared by everything the conventions
    register. ``Project.load`` reads the convention file and applies all
    conventions; constructing a Project directly gives an empty one, which
    tests use to wire tasks by hand.

    Usage:
        project = Project.load(Path("."))
        result = project.execute(["build"])
    """

    def __init__(self, project_dir: Path, convention: Convention):
        self.project_dir = project_dir.resolve()
        self.convention = convention
        self.build_dir = self.project_dir / convention.build_dir
        self.repository = self.project_dir / convention.repository
        self.configurations = ConfigurationContainer(self.repository)
        self.source_sets: dict[str, SourceSet] = {}
        self.tasks = TaskGraph()
        self.history = TaskHistory(self.project_dir / STATE_DIR / TASK_HISTORY_FILE)

    def __repr__(self) -> str:
        return f"Project({self.name!r})"

    @property
    def name(self) -> str:
        return self.project_dir.name

    @classmethod
    def load(cls, project_dir: Path, config_file: Path | None = None) -> Project:
        """Read the convention file and apply every convention.

        Raises:
            ConfigurationError: If the convention file is missing or invalid
        """
        from build_common.loader import load_convention
        from build_common.plugins import apply_conventions

        convention = load_convention(project_dir, config_file)
        project = cls(project_dir, convention)
        apply_conventions(project)
        project.add_declared_dependencies()
        logger.debug(
            f"Configured {project!r}: {len(project.source_sets)} source set(s), "
            f"{len(project.tasks)} task(s)"
        )
        return project

    def add_declared_dependencies(self) -> None:
        """Add the convention's coordinates and files to their configurations.

        Raises:
            ConfigurationError: If a configuration was never created by a convention
        """
        for name, coordinates in self.convention.dependencies.items():
            for coordinate in coordinates:
                self.configurations.add_dependency(name, coordinate)
        for name, files in self.convention.files.items():
            self.configurations.add_files(name, (self.project_dir / f for f in files))

    def add_source_set(self, name: str) -> SourceSet:
        if name in self.source_sets:
            raise ConfigurationError(f"Source set '{name}' already exists")
        source_set = SourceSet(name=name, project_dir=self.project_dir, build_dir=self.build_dir)
        self.source_sets[name] = source_set
        return source_set

    def source_set(self, name: str) -> SourceSet:
        try:
            return self.source_sets[name]
        except KeyError:
            raise ConfigurationError(f"Source set '{name}' not found") from None

    def register(self, task: Task) -> Task:
        return self.tasks.register(task)

    def register_command_task(
        self,
        name: str,
        description: str = "",
        group: str | None = None,
        source_set: SourceSet | None = None,
        depends_on: Iterable[str] = (),
    ) -> Task:
        """Register a task backed by the command configured for ``name``.

        Without a configured command the task has no actions and only
        orders its dependencies.
        """
        command = self.convention.command_for(name)
        if command:
            task: Task = ExecTask(
                name,
                command=command,
                cwd=self.project_dir,
                placeholders=lambda: self.placeholders(source_set),
                description=description,
                group=group,
            )
        else:
            task = Task(name, description=description, group=group)
        task.depends(*depends_on)
        return self.register(task)

    def placeholders(self, source_set: SourceSet | None = None) -> dict[str, str | list[str]]:
        """Values substituted into external command lines."""
        values: dict[str, str | list[str]] = {
            "project_dir": str(self.project_dir),
            "build_dir": str(self.build_dir),
            "compiler_args": self.convention.java.javac_args(),
        }
        formatting = self.convention.formatting
        if formatting.license_header_file:
            values["license_header_file"] = str(self.project_dir / formatting.license_header_file)
        if formatting.google_java_format:
            values["google_java_format"] = formatting.google_java_format
        if source_set is not None:
            values["classpath"] = _join(source_set.runtime_classpath.resolve())
            values["compile_classpath"] = _join(source_set.compile_classpath.resolve())
            values["classes_dir"] = str(source_set.classes_dirs[0])
            values["source_dir"] = str(source_set.java_dir)
            values["manifest"] = str(classpath_manifest_path(self.build_dir, source_set.name))
        return values

    def execute(self, requested: Iterable[str], rerun_tasks: bool = False) -> BuildResult:
        """Run the requested tasks with their dependencies."""
        executor = BuildExecutor(self.tasks, self.history, rerun_tasks=rerun_tasks)
        return executor.execute(requested)


def _join(paths: Iterable[Path]) -> str:
    return os.pathsep.join(str(p) for p in paths)
