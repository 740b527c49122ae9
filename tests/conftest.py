"""Pytest configuration and fixtures for build-common tests."""

import logging
from pathlib import Path

import pytest

from build_common.plugins import reset_plugins

SAMPLE_CONVENTION = """\
group = "org.example.gradle"
version = "0.1.0-SNAPSHOT"
repository = "{repository}"
test_suites = ["functionalTest"]

[[plugins]]
id = "kotlin-dsl"

[[plugins]]
id = "com.diffplug.spotless"
version = "6.15.0"

[[plugins]]
id = "net.ltgt.errorprone"
version = "3.0.1"

[dependencies]
compileOnly = ["com.diffplug.spotless:spotless-plugin-gradle:6.15.0"]
implementation = ["org.apache.commons:commons-configuration2:2.8.0"]
errorprone = ["com.google.errorprone:error_prone_core:2.18.0"]
testImplementation = ["org.hamcrest:hamcrest-core:2.2"]
testRuntimeOnly = ["org.junit.jupiter:junit-jupiter-engine:5.9.2"]
functionalTestImplementation = ["org.apiguardian:apiguardian-api:1.1.2"]

[java]
version = "11"

[formatting]
license_header_file = "gradle/spotless/license.java"
google_java_format = "1.7"
aosp = true
ktlint = true
ktlint_gradle = true

[publishing]
website = "https://example.org/gradle-plugin-common"
vcs_url = "https://example.org/gradle-plugin-common.git"
test_source_sets = ["functionalTest"]

[[publishing.plugins]]
name = "exampleCommon"
id = "org.example.common"
implementation_class = "org.example.gradle.common.CommonPlugin"
display_name = "Plugin for common build-related configs and tasks"
description = "A Gradle plugin for common build-related configs and tasks."
tags = ["example", "common"]
"""


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration after each test.

    This ensures that tests which call setup_logging() don't affect
    other tests that rely on caplog fixture for log capture.
    """
    yield

    logger = logging.getLogger("build_common")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture(autouse=True)
def fresh_plugins():
    """Start every test with an uninitialized plugin manager."""
    reset_plugins()
    yield
    reset_plugins()


@pytest.fixture
def repository(tmp_path: Path) -> Path:
    repo = tmp_path / "repository"
    repo.mkdir()
    return repo


@pytest.fixture
def project_dir(tmp_path: Path, repository: Path) -> Path:
    """A project directory with a complete build-common.toml."""
    directory = tmp_path / "project"
    directory.mkdir()
    (directory / "build-common.toml").write_text(
        SAMPLE_CONVENTION.format(repository=repository.as_posix())
    )
    return directory


@pytest.fixture
def append_to_convention():
    """Append TOML text to a project's convention file."""

    def append(project_dir: Path, text: str) -> None:
        path = project_dir / "build-common.toml"
        path.write_text(path.read_text() + "\n" + text)

    return append
