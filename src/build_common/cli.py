"""Command-line interface for build-common."""

from pathlib import Path

import click

from build_common.config import DEFAULT_CONFIG_FILE, __version__
from build_common.console import console, success, task_table
from build_common.errors import BuildCommonError
from build_common.logging_config import get_logger, setup_logging
from build_common.project import Project

logger = get_logger(__name__)


class BuildCommonCLI:
    """Command-line orchestrator for build-common."""

    def __init__(self, project_dir: Path, config_file: Path | None = None):
        """Initialize CLI orchestrator.

        Args:
            project_dir: Project directory
            config_file: Convention file (defaults to build-common.toml in the project)
        """
        self.project_dir = project_dir
        self.config_file = config_file
        self._project: Project | None = None

    @property
    def project(self) -> Project:
        """The loaded project (read on first use)."""
        if self._project is None:
            self._project = Project.load(self.project_dir, self.config_file)
        return self._project

    def run_tasks(self, task_names: list[str], rerun_tasks: bool = False, dry_run: bool = False) -> int:
        """Run tasks and report the outcome.

        Args:
            task_names: Requested task names
            rerun_tasks: Ignore up-to-date checks
            dry_run: Print the plan without running anything

        Returns:
            Exit code (0 for success, 1 for error)
        """
        try:
            if dry_run:
                for task in self.project.tasks.plan(task_names):
                    click.echo(f":{task.name} SKIPPED")
                return 0

            result = self.project.execute(task_names, rerun_tasks=rerun_tasks)
        except KeyboardInterrupt:
            logger.error("Interrupted by user")
            return 1
        except BuildCommonError as e:
            logger.error(str(e))
            logger.debug("Traceback:", exc_info=True)
            return 1

        result.print_summary()
        return 0 if result.success else 1

    def list_tasks(self, show_all: bool = False) -> None:
        """Print tasks grouped by their group."""
        groups: dict[str, list[tuple[str, str]]] = {}
        for task in self.project.tasks.tasks:
            if task.group is None and not show_all:
                continue
            group = task.group or "other"
            groups.setdefault(group, []).append((task.name, task.description))

        for group in sorted(groups):
            title = f"{group.title()} tasks"
            console.print(task_table(title, groups[group]))
            console.print()

    def classpath(self, suite: str, from_manifest: bool = False) -> list[str]:
        """Runtime classpath of a source set, or the entries of its written manifest."""
        from build_common.classpath.manifest import (
            classpath_manifest_path,
            read_classpath_manifest,
        )

        if from_manifest:
            path = classpath_manifest_path(self.project.build_dir, suite)
            if not path.exists():
                raise click.ClickException(
                    f"No manifest at {path}; run the manifest task for '{suite}' first"
                )
            return read_classpath_manifest(path)
        return [str(p) for p in self.project.source_set(suite).runtime_classpath.resolve()]


def _cli_obj(ctx: click.Context) -> BuildCommonCLI:
    return ctx.find_object(BuildCommonCLI)


def _fail(e: BuildCommonError) -> None:
    logger.debug("Traceback:", exc_info=True)
    raise click.ClickException(str(e)) from e


@click.group(invoke_without_command=True)
@click.version_option(__version__, prog_name="build-common")
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose output (DEBUG level)",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    help="Show only warnings and errors",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Explicit log level (overrides -v/-q)",
)
@click.option(
    "-p",
    "--project-dir",
    type=click.Path(file_okay=False, path_type=Path),  # type: ignore[type-var]
    default=Path("."),
    show_default=True,
    help="Project directory",
)
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),  # type: ignore[type-var]
    default=None,
    help=f"Convention file (default: {DEFAULT_CONFIG_FILE} in the project directory)",
)
@click.pass_context
def cli(ctx, verbose, quiet, log_level, project_dir, config_file):
    """Shared build conventions for JVM plugin projects."""
    if sum([verbose, quiet, log_level is not None]) > 1:
        raise click.UsageError("--verbose, --quiet, and --log-level are mutually exclusive")

    setup_logging(verbose=verbose, quiet=quiet, log_level=log_level)
    ctx.obj = BuildCommonCLI(project_dir=project_dir, config_file=config_file)

    # Without a subcommand, show what can be run
    if ctx.invoked_subcommand is None:
        ctx.invoke(tasks)


@cli.command(name="run")
@click.argument("task_names", nargs=-1)
@click.option("--rerun-tasks", is_flag=True, help="Ignore up-to-date checks")
@click.option("--dry-run", is_flag=True, help="Print the tasks that would run")
@click.pass_context
def run(ctx, task_names, rerun_tasks, dry_run):
    """Run tasks and their dependencies (default: build)."""
    exit_code = _cli_obj(ctx).run_tasks(
        list(task_names) or ["build"], rerun_tasks=rerun_tasks, dry_run=dry_run
    )
    raise SystemExit(exit_code)


@cli.command(name="tasks")
@click.option("--all", "show_all", is_flag=True, help="Include tasks without a group")
@click.pass_context
def tasks(ctx, show_all=False):
    """List the tasks of the project."""
    try:
        _cli_obj(ctx).list_tasks(show_all=show_all)
    except BuildCommonError as e:
        _fail(e)


@cli.command(name="classpath")
@click.argument("suite", default="functionalTest")
@click.option("--manifest", "from_manifest", is_flag=True, help="Read the written manifest")
@click.pass_context
def classpath(ctx, suite, from_manifest):
    """Print the runtime classpath of a source set, one entry per line."""
    try:
        entries = _cli_obj(ctx).classpath(suite, from_manifest=from_manifest)
    except BuildCommonError as e:
        _fail(e)
    for entry in entries:
        click.echo(entry)


@cli.command(name="render")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),  # type: ignore[type-var]
    default=None,
    help="Write to this file instead of stdout",
)
@click.pass_context
def render(ctx, output):
    """Render the convention as a Gradle Kotlin DSL build script."""
    from build_common.generators.gradle.build_gradle import generate_build_gradle
    from build_common.loader import load_convention

    cli_obj = _cli_obj(ctx)
    try:
        convention = load_convention(cli_obj.project_dir, cli_obj.config_file)
    except BuildCommonError as e:
        _fail(e)

    content = generate_build_gradle(convention)
    if output is None:
        click.echo(content, nl=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content, encoding="utf-8")
    success(f"Generated: {output}")


@cli.command(name="init")
@click.option("--group", required=True, help="Group of the project (e.g., org.example.gradle)")
@click.option("--force", is_flag=True, help="Overwrite an existing convention file")
@click.pass_context
def init(ctx, group, force):
    """Write a starter convention file."""
    from build_common.loader import config_path, write_default_convention

    cli_obj = _cli_obj(ctx)
    path = config_path(cli_obj.project_dir, cli_obj.config_file)
    try:
        write_default_convention(path, group=group, force=force)
    except BuildCommonError as e:
        _fail(e)
    success(f"Generated: {path}")


@cli.command(name="conventions")
def conventions():
    """List the loaded conventions."""
    from build_common.plugins import get_registered_conventions

    registered = get_registered_conventions()
    click.echo("Conventions:")
    click.echo("")
    for name, info in registered.items():
        click.echo(f"  {click.style(name, bold=True)}")
        if info.description:
            click.echo(f"    {info.description}")
        if info.module:
            click.echo(f"    Module: {info.module}")
        click.echo("")


def main():
    """Entry point for build-common command."""
    cli()


if __name__ == "__main__":
    main()
