"""Tests for project configuration by the bundled conventions."""

import os
import sys

import pytest

from build_common.errors import ConfigurationError, UnknownTaskError
from build_common.models.task import TaskOutcome
from build_common.project import Project
from build_common.tasks.exec import ExecTask
from build_common.tasks.manifest import ClasspathManifestTask


def jar(repository, group, artifact, version):
    return repository.joinpath(*group.split(".")) / artifact / version / f"{artifact}-{version}.jar"


@pytest.fixture
def project(project_dir):
    return Project.load(project_dir)


class TestProjectLoad:
    def test_source_sets(self, project):
        assert list(project.source_sets) == ["main", "test", "functionalTest"]

    def test_java_tasks(self, project):
        for name in (
            "compileJava",
            "processResources",
            "classes",
            "compileTestJava",
            "testClasses",
            "jar",
            "assemble",
            "test",
            "check",
            "build",
            "clean",
        ):
            assert name in project.tasks

    def test_functional_test_tasks(self, project):
        manifest = project.tasks.get("createFunctionalTestClasspathManifest")

        assert isinstance(manifest, ClasspathManifestTask)
        assert manifest.group == "build"
        assert manifest.description == "Creates a manifest file with the plugin classpath."
        assert manifest.must_run_after == ["functionalTestClasses"]

        suite = project.tasks.get("functionalTest")
        assert suite.group == "verification"
        assert suite.description == "Runs the functional tests."
        assert suite.depends_on == ["functionalTestClasses", "createFunctionalTestClasspathManifest"]
        assert suite.must_run_after == ["test"]
        assert "functionalTest" in project.tasks.get("check").depends_on

    def test_formatting_and_publishing_tasks(self, project):
        check = project.tasks.get("check")

        assert "spotlessCheck" in check.depends_on
        assert "validatePlugins" in check.depends_on
        assert project.tasks.get("compileJava").must_run_after == ["spotlessApply"]
        assert project.tasks.get("processResources").depends_on == ["pluginDescriptors"]
        assert project.tasks.get("publishPlugins").depends_on == ["jar", "validatePlugins"]

    def test_unknown_configuration(self, project_dir, append_to_convention):
        append_to_convention(project_dir, '[files]\nshadowed = ["libs/a.jar"]\n')

        with pytest.raises(ConfigurationError, match="'shadowed' not found"):
            Project.load(project_dir)

    def test_no_formatting_no_spotless_tasks(self, tmp_path):
        (tmp_path / "build-common.toml").write_text('group = "g"\nversion = "1"\n')

        project = Project.load(tmp_path)

        assert "spotlessCheck" not in project.tasks
        assert "publishPlugins" not in project.tasks
        assert "createFunctionalTestClasspathManifest" in project.tasks

    def test_several_suites(self, tmp_path):
        (tmp_path / "build-common.toml").write_text(
            'group = "g"\nversion = "1"\ntest_suites = ["functionalTest", "integrationTest"]\n'
        )

        project = Project.load(tmp_path)

        assert "createIntegrationTestClasspathManifest" in project.tasks
        assert project.tasks.get("check").depends_on == ["test", "functionalTest", "integrationTest"]


class TestClasspaths:
    def test_functional_test_runtime_classpath(self, project, repository):
        build = project.build_dir

        assert project.source_set("functionalTest").runtime_classpath.resolve() == [
            build / "classes" / "java" / "functionalTest",
            build / "classes" / "kotlin" / "functionalTest",
            build / "resources" / "functionalTest",
            jar(repository, "org.apiguardian", "apiguardian-api", "1.1.2"),
            build / "classes" / "java" / "main",
            build / "classes" / "kotlin" / "main",
            build / "resources" / "main",
            jar(repository, "org.hamcrest", "hamcrest-core", "2.2"),
            jar(repository, "org.apache.commons", "commons-configuration2", "2.8.0"),
            jar(repository, "org.junit.jupiter", "junit-jupiter-engine", "5.9.2"),
        ]

    def test_compile_only_stays_off_runtime_classpath(self, project, repository):
        spotless = jar(repository, "com.diffplug.spotless", "spotless-plugin-gradle", "6.15.0")

        assert spotless in project.source_set("main").compile_classpath.resolve()
        assert spotless not in project.source_set("main").runtime_classpath.resolve()

    def test_relative_repository_is_taken_from_project_dir(self, tmp_path, monkeypatch):
        project_dir = tmp_path / "project"
        project_dir.mkdir()
        (project_dir / "build-common.toml").write_text(
            'group = "g"\nversion = "1"\nrepository = "libs/repo"\n'
            '[dependencies]\nimplementation = ["org.example:lib:1.0"]\n'
        )
        monkeypatch.chdir(tmp_path)

        project = Project.load(project_dir)

        assert project.repository == project_dir.resolve() / "libs" / "repo"
        assert project.configurations.resolve("implementation") == [
            project_dir.resolve() / "libs" / "repo" / "org" / "example" / "lib" / "1.0" / "lib-1.0.jar"
        ]

    def test_placeholders(self, project):
        values = project.placeholders(project.source_set("functionalTest"))

        assert values["manifest"] == str(
            project.build_dir / "resources" / "functionalTest" / "pluginClasspath.txt"
        )
        assert values["classpath"].split(os.pathsep)[0] == str(
            project.build_dir / "classes" / "java" / "functionalTest"
        )
        assert "-Werror" in values["compiler_args"]
        assert values["google_java_format"] == "1.7"


class TestExecution:
    def test_manifest_task_writes_runtime_classpath(self, project):
        result = project.execute(["createFunctionalTestClasspathManifest"])

        assert result.success
        manifest = project.build_dir / "resources" / "functionalTest" / "pluginClasspath.txt"
        expected = project.source_set("functionalTest").runtime_classpath.resolve()
        assert manifest.read_text() == "\n".join(str(p) for p in expected)

    def test_manifest_task_is_up_to_date_on_second_run(self, project_dir):
        Project.load(project_dir).execute(["createFunctionalTestClasspathManifest"])

        result = Project.load(project_dir).execute(["createFunctionalTestClasspathManifest"])

        assert result.outcome_of("createFunctionalTestClasspathManifest") is TaskOutcome.UP_TO_DATE

    def test_manifest_task_reruns_when_dependencies_change(self, project_dir):
        Project.load(project_dir).execute(["createFunctionalTestClasspathManifest"])
        path = project_dir / "build-common.toml"
        path.write_text(
            path.read_text().replace(
                'functionalTestImplementation = ["org.apiguardian:apiguardian-api:1.1.2"]',
                'functionalTestImplementation = ["org.apiguardian:apiguardian-api:1.1.3"]',
            )
        )

        project = Project.load(project_dir)
        result = project.execute(["createFunctionalTestClasspathManifest"])

        assert result.outcome_of("createFunctionalTestClasspathManifest") is TaskOutcome.SUCCESS
        assert "apiguardian-api-1.1.3.jar" in project.build_dir.joinpath(
            "resources", "functionalTest", "pluginClasspath.txt"
        ).read_text()

    def test_manifest_task_reruns_when_manifest_deleted(self, project_dir):
        project = Project.load(project_dir)
        project.execute(["createFunctionalTestClasspathManifest"])
        manifest_dir = project.build_dir / "resources" / "functionalTest"
        (manifest_dir / "pluginClasspath.txt").unlink()
        manifest_dir.rmdir()

        result = Project.load(project_dir).execute(["createFunctionalTestClasspathManifest"])

        assert result.outcome_of("createFunctionalTestClasspathManifest") is TaskOutcome.SUCCESS
        assert (manifest_dir / "pluginClasspath.txt").exists()

    def test_functional_test_runs_after_manifest(self, project):
        result = project.execute(["functionalTest"])
        executed = [r.task_name for r in result.results]

        assert executed.index("functionalTestClasses") < executed.index(
            "createFunctionalTestClasspathManifest"
        )
        assert executed.index("createFunctionalTestClasspathManifest") < executed.index(
            "functionalTest"
        )
        assert "test" not in executed

    def test_check_runs_unit_tests_before_functional_tests(self, project):
        plan = [task.name for task in project.tasks.plan(["check"])]

        assert plan.index("test") < plan.index("functionalTest")
        assert plan[-1] == "check"

    def test_configured_command_becomes_exec_task(self, project_dir, append_to_convention):
        append_to_convention(project_dir, '[commands]\ntest = ["mvn", "-q", "test"]\n')

        project = Project.load(project_dir)

        assert isinstance(project.tasks.get("test"), ExecTask)

    def test_failing_command_stops_build(self, project_dir, append_to_convention):
        append_to_convention(
            project_dir,
            f'[commands]\ntest = ["{sys.executable}", "-c", "import sys; sys.exit(3)"]\n',
        )
        project = Project.load(project_dir)

        result = project.execute(["check"])

        assert not result.success
        assert result.failed_task.task_name == "test"
        assert result.outcome_of("functionalTest") is None
        assert "Execution failed for task ':test'" in str(result.error)

    def test_unknown_task(self, project):
        with pytest.raises(UnknownTaskError):
            project.execute(["javadoc"])
