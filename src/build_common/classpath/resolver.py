"""Dependency configurations and lazily assembled classpaths.

Configurations are named buckets of dependency coordinates and plain files.
A configuration may extend others; resolving it yields its own entries
followed by those of its parents, in declaration order. Coordinates are
located in a local Maven-layout repository; transitive dependencies are
not followed.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from build_common.errors import ConfigurationError
from build_common.logging_config import get_logger
from build_common.models.convention import Coordinate
from build_common.utils import ordered_union

logger = get_logger(__name__)


def artifact_path(repository: Path, coordinate: Coordinate) -> Path:
    """Location of an artifact in a Maven-layout repository."""
    return (
        repository.joinpath(*coordinate.group.split("."))
        / coordinate.artifact
        / coordinate.version
        / coordinate.file_name
    )


@dataclass
class Configuration:
    """A named set of dependencies."""

    name: str
    description: str = ""
    coordinates: list[Coordinate] = field(default_factory=list)
    files: list[Path] = field(default_factory=list)
    extends_from: list[str] = field(default_factory=list)


class ConfigurationContainer:
    """Registry of a project's configurations.

    Usage:
        configurations = ConfigurationContainer(repository)
        configurations.create("implementation")
        configurations.create("runtimeClasspath", extends_from=["implementation"])
        paths = configurations.resolve("runtimeClasspath")
    """

    def __init__(self, repository: Path):
        self.repository = repository
        self._configurations: dict[str, Configuration] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._configurations

    def create(
        self, name: str, extends_from: Iterable[str] = (), description: str = ""
    ) -> Configuration:
        """Create a configuration, or extend the parents of an existing one."""
        configuration = self._configurations.get(name)
        if configuration is None:
            configuration = Configuration(name=name, description=description)
            self._configurations[name] = configuration
        for parent in extends_from:
            if parent not in configuration.extends_from:
                configuration.extends_from.append(parent)
        return configuration

    def get(self, name: str) -> Configuration:
        """Look up a configuration.

        Raises:
            ConfigurationError: If no configuration has that name
        """
        try:
            return self._configurations[name]
        except KeyError:
            raise ConfigurationError(f"Configuration with name '{name}' not found") from None

    def add_dependency(self, name: str, coordinate: Coordinate) -> None:
        self.get(name).coordinates.append(coordinate)

    def add_files(self, name: str, files: Iterable[Path]) -> None:
        self.get(name).files.extend(files)

    def resolve(self, name: str) -> list[Path]:
        """Resolve a configuration to an ordered list of files.

        Raises:
            ConfigurationError: If the configuration (or a parent) is unknown,
                or the extends-from chain loops
        """
        return self._resolve(name, stack=())

    def _resolve(self, name: str, stack: tuple[str, ...]) -> list[Path]:
        if name in stack:
            chain = " -> ".join((*stack, name))
            raise ConfigurationError(f"Configuration hierarchy loops: {chain}")

        configuration = self.get(name)
        own = [artifact_path(self.repository, c) for c in configuration.coordinates]
        parents = [self._resolve(parent, (*stack, name)) for parent in configuration.extends_from]
        return ordered_union(configuration.files, own, *parents)


class Classpath:
    """An ordered, lazily evaluated union of file providers.

    Providers are called on ``resolve()``, so configurations and outputs
    registered after the classpath was wired are still seen.
    """

    def __init__(self, *providers: Callable[[], Iterable[Path]]):
        self._providers: list[Callable[[], Iterable[Path]]] = list(providers)

    def add(self, provider: Callable[[], Iterable[Path]]) -> Classpath:
        self._providers.append(provider)
        return self

    def resolve(self) -> list[Path]:
        return ordered_union(*(provider() for provider in self._providers))

    def __iter__(self):
        return iter(self.resolve())
