"""Bundled formatting convention.

Registers ``spotlessCheck`` and ``spotlessApply`` when the convention
selects a formatter. Formatting itself is done by the configured commands;
``${google_java_format}`` and ``${license_header_file}`` are available to
them as placeholders.
"""

from build_common import hookimpl
from build_common.config import FORMATTING_GROUP, VERIFICATION_GROUP
from build_common.logging_config import get_logger

logger = get_logger(__name__)


@hookimpl
def register_conventions() -> dict:
    return {
        "name": "spotless",
        "description": "Source formatting check and apply tasks",
    }


def formatter_steps(formatting) -> list[str]:
    """Human-readable list of the selected formatter steps."""
    steps = []
    if formatting.license_header_file:
        steps.append(f"java: license header from {formatting.license_header_file}")
    if formatting.google_java_format:
        style = " (AOSP)" if formatting.aosp else ""
        steps.append(f"java: google-java-format {formatting.google_java_format}{style}")
    if formatting.ktlint:
        steps.append("kotlin: ktlint")
    if formatting.ktlint_gradle:
        steps.append("kotlinGradle: ktlint")
    return steps


@hookimpl
def apply_convention(project) -> None:
    formatting = project.convention.formatting
    if not formatting.enabled:
        return

    logger.debug(f"Formatter steps: {', '.join(formatter_steps(formatting))}")

    project.register_command_task(
        "spotlessCheck",
        description="Checks that sourcecode satisfies formatting steps.",
        group=VERIFICATION_GROUP,
    )
    project.register_command_task(
        "spotlessApply",
        description="Applies code formatting steps to sourcecode in-place.",
        group=FORMATTING_GROUP,
    )
    project.tasks.get("check").depends("spotlessCheck")
    # formatting first, so compilation sees the formatted sources
    project.tasks.get("compileJava").runs_after("spotlessApply")
