"""Convention data models.

A ``Convention`` is the whole declarative setup of a project: plugin
requests, dependency coordinates, compiler flags, formatting rules and
publishing metadata. It is built once per invocation and handed to every
task that needs it; nothing mutates it afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from build_common.config import (
    DEFAULT_BUILD_DIR,
    DEFAULT_COMPILER_ARGS,
    DEFAULT_ENCODING,
    DEFAULT_ERRORPRONE_ERRORS,
    DEFAULT_JAVA_VERSION,
    DEFAULT_REPOSITORY,
    DEFAULT_TEST_SUITES,
)
from build_common.errors import ConfigurationError


def _table(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key, {})
    if not isinstance(value, dict):
        raise ConfigurationError(f"[{key}] must be a table")
    return value


def _array(data: dict[str, Any], key: str, default: list | None = None) -> list:
    value = data.get(key, [] if default is None else default)
    if not isinstance(value, list):
        raise ConfigurationError(f"'{key}' must be an array")
    return value


@dataclass(frozen=True)
class Coordinate:
    """A Maven artifact coordinate (``group:artifact:version[:classifier]``)."""

    group: str
    artifact: str
    version: str
    classifier: str | None = None

    @classmethod
    def parse(cls, notation: str) -> Coordinate:
        """Parse a coordinate string.

        Raises:
            ConfigurationError: If the notation does not have 3 or 4 non-empty parts
        """
        parts = notation.strip().split(":")
        if len(parts) not in (3, 4) or not all(parts):
            raise ConfigurationError(
                f"Invalid dependency notation '{notation}', expected group:artifact:version"
            )
        return cls(*parts)

    @property
    def notation(self) -> str:
        base = f"{self.group}:{self.artifact}:{self.version}"
        return f"{base}:{self.classifier}" if self.classifier else base

    @property
    def file_name(self) -> str:
        suffix = f"-{self.classifier}" if self.classifier else ""
        return f"{self.artifact}-{self.version}{suffix}.jar"

    def __str__(self) -> str:
        return self.notation


@dataclass(frozen=True)
class PluginRequest:
    """A build plugin applied to the project (``id`` plus optional version)."""

    id: str
    version: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | str) -> PluginRequest:
        if isinstance(data, str):
            return cls(id=data)
        if not isinstance(data, dict) or "id" not in data:
            raise ConfigurationError(f"Plugin entry without 'id': {data}")
        return cls(id=data["id"], version=data.get("version"))

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"id": self.id}
        if self.version:
            result["version"] = self.version
        return result


@dataclass(frozen=True)
class JavaSettings:
    """Java compatibility and compiler options."""

    source_compatibility: str = DEFAULT_JAVA_VERSION
    target_compatibility: str = DEFAULT_JAVA_VERSION
    encoding: str = DEFAULT_ENCODING
    compiler_args: tuple[str, ...] = tuple(DEFAULT_COMPILER_ARGS)
    errorprone_errors: tuple[str, ...] = tuple(DEFAULT_ERRORPRONE_ERRORS)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> JavaSettings:
        version = str(data.get("version", DEFAULT_JAVA_VERSION))
        return cls(
            source_compatibility=str(data.get("source_compatibility", version)),
            target_compatibility=str(data.get("target_compatibility", version)),
            encoding=data.get("encoding", DEFAULT_ENCODING),
            compiler_args=tuple(data.get("compiler_args", DEFAULT_COMPILER_ARGS)),
            errorprone_errors=tuple(data.get("errorprone_errors", DEFAULT_ERRORPRONE_ERRORS)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_compatibility": self.source_compatibility,
            "target_compatibility": self.target_compatibility,
            "encoding": self.encoding,
            "compiler_args": list(self.compiler_args),
            "errorprone_errors": list(self.errorprone_errors),
        }

    def javac_args(self) -> list[str]:
        """Full argument list for a Java compilation (without sources or classpath)."""
        args = ["-encoding", self.encoding]
        args += ["-source", self.source_compatibility, "-target", self.target_compatibility]
        args += list(self.compiler_args)
        if self.errorprone_errors:
            checks = " ".join(f"-Xep:{check}:ERROR" for check in self.errorprone_errors)
            args += ["-XDcompilePolicy=simple", f"-Xplugin:ErrorProne {checks}"]
        return args


@dataclass(frozen=True)
class FormattingSettings:
    """Formatter selection per source language."""

    license_header_file: str | None = None
    google_java_format: str | None = None
    aosp: bool = False
    ktlint: bool = False
    ktlint_gradle: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FormattingSettings:
        return cls(
            license_header_file=data.get("license_header_file"),
            google_java_format=data.get("google_java_format"),
            aosp=bool(data.get("aosp", False)),
            ktlint=bool(data.get("ktlint", False)),
            ktlint_gradle=bool(data.get("ktlint_gradle", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.license_header_file:
            result["license_header_file"] = self.license_header_file
        if self.google_java_format:
            result["google_java_format"] = self.google_java_format
        result["aosp"] = self.aosp
        result["ktlint"] = self.ktlint
        result["ktlint_gradle"] = self.ktlint_gradle
        return result

    @property
    def java_enabled(self) -> bool:
        return bool(self.license_header_file or self.google_java_format)

    @property
    def enabled(self) -> bool:
        return self.java_enabled or self.ktlint or self.ktlint_gradle


@dataclass(frozen=True)
class PluginDeclaration:
    """A plugin this project publishes."""

    name: str
    id: str
    implementation_class: str
    display_name: str = ""
    description: str = ""
    tags: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PluginDeclaration:
        if not isinstance(data, dict):
            raise ConfigurationError(f"Published plugin must be a table: {data!r}")
        missing = [key for key in ("name", "id", "implementation_class") if not data.get(key)]
        if missing:
            raise ConfigurationError(
                f"Published plugin is missing required field(s): {', '.join(missing)}"
            )
        return cls(
            name=data["name"],
            id=data["id"],
            implementation_class=data["implementation_class"],
            display_name=data.get("display_name", ""),
            description=data.get("description", ""),
            tags=tuple(data.get("tags", [])),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "id": self.id,
            "implementation_class": self.implementation_class,
            "display_name": self.display_name,
            "description": self.description,
            "tags": list(self.tags),
        }


@dataclass(frozen=True)
class PublishingSettings:
    """Plugin portal metadata."""

    website: str | None = None
    vcs_url: str | None = None
    plugins: tuple[PluginDeclaration, ...] = ()
    test_source_sets: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PublishingSettings:
        return cls(
            website=data.get("website"),
            vcs_url=data.get("vcs_url"),
            plugins=tuple(PluginDeclaration.from_dict(p) for p in _array(data, "plugins")),
            test_source_sets=tuple(data.get("test_source_sets", [])),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.website:
            result["website"] = self.website
        if self.vcs_url:
            result["vcs_url"] = self.vcs_url
        result["test_source_sets"] = list(self.test_source_sets)
        result["plugins"] = [p.to_dict() for p in self.plugins]
        return result


def _freeze_lists(data: dict[str, Any], section: str) -> Mapping[str, tuple[str, ...]]:
    frozen = {}
    for key, values in data.items():
        if isinstance(values, str) or not isinstance(values, list):
            raise ConfigurationError(f"[{section}] '{key}' must be a list of strings")
        frozen[key] = tuple(str(v) for v in values)
    return MappingProxyType(frozen)


@dataclass(frozen=True)
class Convention:
    """The complete declarative setup of a project."""

    group: str
    version: str
    repositories: tuple[str, ...] = ("mavenCentral",)
    plugins: tuple[PluginRequest, ...] = ()
    dependencies: Mapping[str, tuple[Coordinate, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    files: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))
    java: JavaSettings = field(default_factory=JavaSettings)
    formatting: FormattingSettings = field(default_factory=FormattingSettings)
    publishing: PublishingSettings = field(default_factory=PublishingSettings)
    test_suites: tuple[str, ...] = tuple(DEFAULT_TEST_SUITES)
    commands: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))
    repository: Path = DEFAULT_REPOSITORY
    build_dir: str = DEFAULT_BUILD_DIR

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Convention:
        """Create a Convention from parsed TOML data.

        Raises:
            ConfigurationError: If required keys are missing or values are malformed
        """
        for key in ("group", "version"):
            if not data.get(key):
                raise ConfigurationError(f"Convention is missing required key '{key}'")

        dependencies = {
            configuration: tuple(Coordinate.parse(n) for n in notations)
            for configuration, notations in _freeze_lists(
                _table(data, "dependencies"), "dependencies"
            ).items()
        }

        suites = tuple(_array(data, "test_suites", DEFAULT_TEST_SUITES))
        for suite in suites:
            if not isinstance(suite, str) or not suite.isidentifier():
                raise ConfigurationError(f"Invalid test suite name '{suite}'")

        repository = data.get("repository")
        if repository is not None and not isinstance(repository, str):
            raise ConfigurationError("'repository' must be a string")
        return cls(
            group=data["group"],
            version=str(data["version"]),
            repositories=tuple(data.get("repositories", ["mavenCentral"])),
            plugins=tuple(PluginRequest.from_dict(p) for p in _array(data, "plugins")),
            dependencies=MappingProxyType(dependencies),
            files=_freeze_lists(_table(data, "files"), "files"),
            java=JavaSettings.from_dict(_table(data, "java")),
            formatting=FormattingSettings.from_dict(_table(data, "formatting")),
            publishing=PublishingSettings.from_dict(_table(data, "publishing")),
            test_suites=suites,
            commands=_freeze_lists(_table(data, "commands"), "commands"),
            repository=Path(repository).expanduser() if repository else DEFAULT_REPOSITORY,
            build_dir=data.get("build_dir", DEFAULT_BUILD_DIR),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary in the layout of the convention file."""
        result: dict[str, Any] = {
            "group": self.group,
            "version": self.version,
            "repositories": list(self.repositories),
            "test_suites": list(self.test_suites),
            "build_dir": self.build_dir,
            "plugins": [p.to_dict() for p in self.plugins],
            "dependencies": {
                name: [c.notation for c in coords] for name, coords in self.dependencies.items()
            },
            "files": {name: list(paths) for name, paths in self.files.items()},
            "java": self.java.to_dict(),
            "formatting": self.formatting.to_dict(),
            "publishing": self.publishing.to_dict(),
            "commands": {name: list(args) for name, args in self.commands.items()},
        }
        if self.repository != DEFAULT_REPOSITORY:
            result["repository"] = str(self.repository)
        return result

    def command_for(self, task_name: str) -> tuple[str, ...] | None:
        """External command configured for a task, if any."""
        return self.commands.get(task_name)
