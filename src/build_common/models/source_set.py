"""Source set model."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from build_common.classpath.resolver import Classpath
from build_common.utils import capitalize


@dataclass
class SourceSet:
    """A group of sources compiled and run together.

    Attributes:
        name: Source set name (e.g., 'main', 'test', 'functionalTest')
        project_dir: Project directory (sources live under src/<name>)
        build_dir: Build output directory
        compile_classpath: Classpath used to compile the sources
        runtime_classpath: Classpath used to run them
    """

    name: str
    project_dir: Path
    build_dir: Path
    compile_classpath: Classpath = field(default_factory=Classpath)
    runtime_classpath: Classpath = field(default_factory=Classpath)

    @property
    def java_dir(self) -> Path:
        return self.project_dir / "src" / self.name / "java"

    @property
    def resources_src_dir(self) -> Path:
        return self.project_dir / "src" / self.name / "resources"

    @property
    def classes_dirs(self) -> list[Path]:
        return [
            self.build_dir / "classes" / "java" / self.name,
            self.build_dir / "classes" / "kotlin" / self.name,
        ]

    @property
    def resources_dir(self) -> Path:
        return self.build_dir / "resources" / self.name

    @property
    def output(self) -> list[Path]:
        """Compiled classes dirs followed by the processed resources dir."""
        return [*self.classes_dirs, self.resources_dir]

    def task_name(self, verb: str, target: str = "") -> str:
        """Name a task for this source set the conventional way.

        ``main`` is omitted: ``compileJava``, ``compileTestJava``,
        ``processFunctionalTestResources``.
        """
        infix = "" if self.name == "main" else capitalize(self.name)
        return f"{verb}{infix}{target}"

    def configuration_name(self, base: str) -> str:
        """Name a configuration for this source set (``implementation``, ``testImplementation``)."""
        if self.name == "main":
            return base
        return f"{self.name}{capitalize(base)}"
