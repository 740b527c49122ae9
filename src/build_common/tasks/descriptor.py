"""Plugin descriptor generation and validation."""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from pathlib import Path

from build_common.config import BUILD_GROUP, VERIFICATION_GROUP
from build_common.models.convention import PluginDeclaration
from build_common.tasks.base import Task

JAVA_CLASS_NAME = re.compile(r"^[A-Za-z_$][\w$]*(\.[A-Za-z_$][\w$]*)*$")
PLUGIN_ID = re.compile(r"^[A-Za-z0-9][A-Za-z0-9.\-_]*[A-Za-z0-9]$")


def descriptor_content(plugin: PluginDeclaration) -> str:
    return f"implementation-class={plugin.implementation_class}\n"


class PluginDescriptorTask(Task):
    """Writes ``META-INF/gradle-plugins/<id>.properties`` for every declared plugin."""

    def __init__(self, plugins: Sequence[PluginDeclaration], resources_dir: Path):
        super().__init__(
            "pluginDescriptors",
            description="Generates plugin descriptors from plugin declarations.",
            group=BUILD_GROUP,
        )
        self.plugins = list(plugins)
        self.descriptors_dir = resources_dir / "META-INF" / "gradle-plugins"

        self.input_property(
            "plugins", {p.id: p.implementation_class for p in self.plugins}
        )
        self.output_dir(self.descriptors_dir)
        self.do_last(PluginDescriptorTask.write)

    def write(self) -> None:
        self.descriptors_dir.mkdir(parents=True, exist_ok=True)
        expected = {f"{plugin.id}.properties" for plugin in self.plugins}
        for stale in self.descriptors_dir.glob("*.properties"):
            if stale.name not in expected:
                stale.unlink()
        for plugin in self.plugins:
            path = self.descriptors_dir / f"{plugin.id}.properties"
            path.write_text(descriptor_content(plugin), encoding="utf-8")


def validate_plugins(
    plugins: Sequence[PluginDeclaration],
    test_source_sets: Sequence[str],
    known_source_sets: Sequence[str],
) -> list[str]:
    """Collect problems with the published plugin declarations."""
    problems: list[str] = []
    seen_ids: set[str] = set()
    for plugin in plugins:
        if not PLUGIN_ID.match(plugin.id) or "." not in plugin.id:
            problems.append(f"Plugin '{plugin.name}': invalid id '{plugin.id}'")
        if plugin.id in seen_ids:
            problems.append(f"Plugin '{plugin.name}': duplicate id '{plugin.id}'")
        seen_ids.add(plugin.id)
        if not JAVA_CLASS_NAME.match(plugin.implementation_class):
            problems.append(
                f"Plugin '{plugin.name}': invalid implementation class "
                f"'{plugin.implementation_class}'"
            )
        if not plugin.display_name:
            problems.append(f"Plugin '{plugin.name}': missing display name")
    for name in test_source_sets:
        if name not in known_source_sets:
            problems.append(f"Test source set '{name}' is not defined")
    return problems


class ValidatePluginsTask(Task):
    """Fails when a published plugin declaration is incomplete or invalid."""

    def __init__(
        self,
        plugins: Sequence[PluginDeclaration],
        test_source_sets: Sequence[str],
        known_source_sets: Callable[[], Sequence[str]],
    ):
        super().__init__(
            "validatePlugins",
            description="Validates the plugin declarations.",
            group=VERIFICATION_GROUP,
        )
        self.plugins = list(plugins)
        self.test_source_sets = list(test_source_sets)
        self.known_source_sets = known_source_sets
        self.do_last(ValidatePluginsTask.validate)

    def validate(self) -> None:
        problems = validate_plugins(self.plugins, self.test_source_sets, self.known_source_sets())
        if problems:
            raise ValueError("Plugin validation failed:\n  " + "\n  ".join(problems))
