"""Hook specifications for build-common conventions.

A convention is a plugin that turns the project's ``Convention`` settings
into configurations, source sets and tasks. Conventions use the
@hookimpl decorator to implement these hooks.

Example convention:

    from build_common import hookimpl

    @hookimpl
    def register_conventions():
        return {
            "name": "javadoc",
            "description": "Adds a javadoc task",
        }

    @hookimpl
    def apply_convention(project):
        project.register_command_task("javadoc", description="Generates Javadoc.")
"""

from typing import Any

import pluggy

hookspec = pluggy.HookspecMarker("build_common")


class ConventionSpec:
    """Hook specifications for convention plugins.

    Each hook uses Pluggy's dependency injection - plugins only need to
    declare the parameters they actually use.
    """

    @hookspec
    def register_conventions(self) -> dict:  # type: ignore[empty-body]
        """Describe the convention provided by this plugin.

        Returns:
            Dict with convention info:
                - name: Convention identifier (required)
                - description: Human-readable description (required)
        """
        ...

    @hookspec
    def apply_convention(self, project: Any) -> None:
        """Apply the convention to a project.

        Called once per project, after the convention file has been loaded.
        The ``java`` convention runs first (``tryfirst``) so the ``main`` and
        ``test`` source sets and the lifecycle tasks already exist when the
        others are applied.

        Args:
            project: The build_common.project.Project being configured
        """
