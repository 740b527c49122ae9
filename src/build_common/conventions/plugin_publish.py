"""Bundled plugin publishing convention.

Generates plugin descriptors into the main resources, validates the
declared plugins and exposes ``publishPlugins`` for the configured upload
command.
"""

from build_common import hookimpl
from build_common.config import PUBLISHING_GROUP
from build_common.tasks.descriptor import PluginDescriptorTask, ValidatePluginsTask


@hookimpl
def register_conventions() -> dict:
    return {
        "name": "plugin-publish",
        "description": "Plugin descriptors, validation and publishing",
    }


@hookimpl(trylast=True)
def apply_convention(project) -> None:
    publishing = project.convention.publishing
    if not publishing.plugins:
        return

    main = project.source_set("main")
    project.register(PluginDescriptorTask(publishing.plugins, main.resources_dir))
    project.tasks.get("processResources").depends("pluginDescriptors")

    project.register(
        ValidatePluginsTask(
            publishing.plugins,
            publishing.test_source_sets,
            known_source_sets=lambda: list(project.source_sets),
        )
    )
    project.tasks.get("check").depends("validatePlugins")

    project.register_command_task(
        "publishPlugins",
        description="Publishes this plugin to the Gradle Plugin portal.",
        group=PUBLISHING_GROUP,
        depends_on=["jar", "validatePlugins"],
    )
