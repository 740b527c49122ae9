"""Task writing the plugin classpath manifest of a test suite."""

from __future__ import annotations

from pathlib import Path

from build_common.classpath.manifest import (
    classpath_manifest_dir,
    classpath_manifest_path,
    write_classpath_manifest,
)
from build_common.classpath.resolver import Classpath
from build_common.config import BUILD_GROUP
from build_common.tasks.base import Task
from build_common.utils import capitalize


def manifest_task_name(suite_name: str) -> str:
    """``functionalTest`` -> ``createFunctionalTestClasspathManifest``."""
    return f"create{capitalize(suite_name)}ClasspathManifest"


class ClasspathManifestTask(Task):
    """Writes a suite's runtime classpath to ``resources/<suite>/pluginClasspath.txt``.

    Inputs are the classpath entries themselves, so the task is skipped
    when the classpath is unchanged and the manifest directory exists.
    """

    def __init__(self, suite_name: str, build_dir: Path, classpath: Classpath):
        super().__init__(
            manifest_task_name(suite_name),
            description="Creates a manifest file with the plugin classpath.",
            group=BUILD_GROUP,
        )
        self.suite_name = suite_name
        self.classpath = classpath
        self.manifest_dir = classpath_manifest_dir(build_dir, suite_name)
        self.manifest_path = classpath_manifest_path(build_dir, suite_name)

        self.input_files(classpath.resolve)
        self.output_dir(self.manifest_dir)
        self.do_last(ClasspathManifestTask.write)

    def write(self) -> None:
        write_classpath_manifest(self.classpath.resolve(), self.manifest_dir)
