"""Reading and writing the convention file (``build-common.toml``)."""

from __future__ import annotations

import tomllib
from pathlib import Path

import tomlkit
from expandvars import ExpandvarsException

from build_common.config import DEFAULT_CONFIG_FILE
from build_common.errors import ConfigurationError
from build_common.logging_config import get_logger
from build_common.models.convention import (
    Convention,
    FormattingSettings,
    JavaSettings,
    PluginDeclaration,
    PluginRequest,
    PublishingSettings,
)
from build_common.utils import expandvars_dict

logger = get_logger(__name__)


def config_path(project_dir: Path, config_file: Path | None = None) -> Path:
    """Locate the convention file; relative paths are taken from the project dir."""
    if config_file is None:
        return project_dir / DEFAULT_CONFIG_FILE
    return config_file if config_file.is_absolute() else project_dir / config_file


def load_convention(project_dir: Path, config_file: Path | None = None) -> Convention:
    """Load and validate the convention of a project.

    ``$VAR`` and ``${VAR:-default}`` references in string values are
    expanded from the environment.

    Args:
        project_dir: Project directory
        config_file: Explicit convention file (defaults to build-common.toml)

    Returns:
        The immutable Convention

    Raises:
        ConfigurationError: If the file is missing, not valid TOML, or invalid
    """
    path = config_path(project_dir, config_file)
    if not path.exists():
        raise ConfigurationError(f"Convention file not found: {path}")

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {path}: {e}") from e

    try:
        data = expandvars_dict(data)
    except ExpandvarsException as e:
        raise ConfigurationError(f"Cannot expand variables in {path}: {e}") from e

    convention = Convention.from_dict(data)
    logger.debug(f"Loaded convention {convention.group}:{convention.version} from {path}")
    return convention


def default_convention(group: str, version: str = "0.1.0-SNAPSHOT") -> Convention:
    """A starter convention for a Gradle plugin project."""
    return Convention(
        group=group,
        version=version,
        plugins=(
            PluginRequest("kotlin-dsl"),
            PluginRequest("com.gradle.plugin-publish", "1.1.0"),
            PluginRequest("com.diffplug.spotless", "6.15.0"),
            PluginRequest("net.ltgt.errorprone", "3.0.1"),
        ),
        java=JavaSettings(),
        formatting=FormattingSettings(
            license_header_file="gradle/spotless/license.java",
            google_java_format="1.7",
            aosp=True,
            ktlint=True,
            ktlint_gradle=True,
        ),
        publishing=PublishingSettings(
            plugins=(
                PluginDeclaration(
                    name="common",
                    id=f"{group}.common",
                    implementation_class=f"{group}.CommonPlugin",
                    display_name="Plugin for common build-related configs and tasks",
                ),
            ),
            test_source_sets=("functionalTest",),
        ),
    )


def convention_to_toml(convention: Convention) -> str:
    """Render a convention in the layout ``load_convention`` reads."""
    data = convention.to_dict()
    doc = tomlkit.document()
    doc.add(tomlkit.comment("build-common convention"))

    for key in ("group", "version", "repositories", "test_suites", "repository", "build_dir"):
        if key in data:
            doc[key] = data[key]

    plugins = tomlkit.aot()
    for plugin in data["plugins"]:
        plugins.append(tomlkit.item(plugin))
    doc["plugins"] = plugins

    for section in ("dependencies", "files", "java", "formatting", "commands"):
        table = tomlkit.table()
        for key, value in data[section].items():
            table[key] = value
        doc[section] = table

    publishing = tomlkit.table()
    published = data["publishing"].pop("plugins")
    for key, value in data["publishing"].items():
        publishing[key] = value
    declarations = tomlkit.aot()
    for plugin in published:
        declarations.append(tomlkit.item(plugin))
    publishing["plugins"] = declarations
    doc["publishing"] = publishing

    return tomlkit.dumps(doc)


def write_default_convention(path: Path, group: str, force: bool = False) -> Path:
    """Write a starter convention file.

    Raises:
        ConfigurationError: If the file exists and ``force`` is not set
    """
    if path.exists() and not force:
        raise ConfigurationError(f"{path} already exists")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(convention_to_toml(default_convention(group)), encoding="utf-8")
    return path
