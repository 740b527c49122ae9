"""Configuration constants for build-common."""

from pathlib import Path

# Version
__version__ = "0.1.0"

# Project files (relative to the project directory)
DEFAULT_CONFIG_FILE = "build-common.toml"
"""Convention file read from the project directory"""

DEFAULT_BUILD_DIR = "build"
"""Build output directory"""

STATE_DIR = ".build-common"
"""Directory holding task history between invocations"""

TASK_HISTORY_FILE = "task-history.json"

# Classpath manifest
MANIFEST_FILE_NAME = "pluginClasspath.txt"
"""File written for each secondary test suite"""

DEFAULT_TEST_SUITES = ["functionalTest"]
"""Secondary test suites registered when the convention names none"""

# Local artifact repository (Maven layout)
DEFAULT_REPOSITORY = Path.home() / ".m2" / "repository"

# Java defaults
DEFAULT_JAVA_VERSION = "11"
DEFAULT_ENCODING = "UTF-8"

DEFAULT_COMPILER_ARGS = ["-Xlint:all", "-Xlint:-path", "-Xlint:-options", "-Werror"]
"""Lint flags passed to every Java compilation"""

DEFAULT_ERRORPRONE_ERRORS = ["MissingOverride", "WildcardImport"]
"""Error Prone checks raised to ERROR"""

# External command settings
COMMAND_TIMEOUT_SECONDS = 600
"""Timeout for external task commands (10 minutes)"""

# Task groups
BUILD_GROUP = "build"
VERIFICATION_GROUP = "verification"
FORMATTING_GROUP = "formatting"
PUBLISHING_GROUP = "plugin portal"
