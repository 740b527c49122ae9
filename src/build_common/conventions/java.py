"""Bundled Java convention.

Creates the ``main`` and ``test`` source sets, the standard dependency
configurations and the compile/test/lifecycle tasks. Compilation, packaging
and test execution are delegated to the commands configured under
``[commands]``; the convention only supplies their arguments through
placeholders (``${compiler_args}`` carries the encoding, compatibility
flags, lint flags and Error Prone checks).
"""

import shutil

from build_common import hookimpl
from build_common.config import BUILD_GROUP, VERIFICATION_GROUP
from build_common.models.source_set import SourceSet
from build_common.tasks.base import Task


@hookimpl
def register_conventions() -> dict:
    return {
        "name": "java",
        "description": "Java source sets, compiler options and lifecycle tasks",
    }


def _configure_main(project) -> SourceSet:
    configurations = project.configurations
    configurations.create("api")
    configurations.create("implementation", extends_from=["api"])
    configurations.create("compileOnly")
    configurations.create("runtimeOnly")
    configurations.create("compileClasspath", extends_from=["compileOnly", "implementation"])
    configurations.create("runtimeClasspath", extends_from=["implementation", "runtimeOnly"])
    configurations.create("errorprone", description="Error Prone compiler plugin")

    main = project.add_source_set("main")
    main.compile_classpath.add(lambda: configurations.resolve("compileClasspath"))
    main.runtime_classpath.add(lambda: main.output)
    main.runtime_classpath.add(lambda: configurations.resolve("runtimeClasspath"))
    return main


def _configure_test(project, main: SourceSet) -> SourceSet:
    configurations = project.configurations
    configurations.create("testImplementation", extends_from=["implementation"])
    configurations.create("testCompileOnly")
    configurations.create("testRuntimeOnly", extends_from=["runtimeOnly"])
    configurations.create(
        "testCompileClasspath", extends_from=["testCompileOnly", "testImplementation"]
    )
    configurations.create(
        "testRuntimeClasspath", extends_from=["testImplementation", "testRuntimeOnly"]
    )

    test = project.add_source_set("test")
    test.compile_classpath.add(lambda: main.output)
    test.compile_classpath.add(lambda: configurations.resolve("testCompileClasspath"))
    test.runtime_classpath.add(lambda: test.output)
    test.runtime_classpath.add(lambda: main.output)
    test.runtime_classpath.add(lambda: configurations.resolve("testRuntimeClasspath"))
    return test


def _copy_resources(source_set: SourceSet) -> None:
    source = source_set.resources_src_dir
    target = source_set.resources_dir
    target.mkdir(parents=True, exist_ok=True)
    if source.is_dir():
        shutil.copytree(source, target, dirs_exist_ok=True)


def classes_task_name(source_set: SourceSet) -> str:
    return "classes" if source_set.name == "main" else f"{source_set.name}Classes"


def register_source_set_tasks(project, source_set: SourceSet) -> None:
    """Register compile, resources and classes tasks for a source set.

    Non-main source sets compile against the main classes, so their
    compile task depends on ``classes``.
    """
    compile_name = source_set.task_name("compile", "Java")
    resources_name = source_set.task_name("process", "Resources")

    compile_task = project.register_command_task(
        compile_name,
        description=f"Compiles {source_set.name} Java source.",
        source_set=source_set,
    )
    if source_set.name != "main":
        compile_task.depends("classes")

    resources = Task(resources_name, description=f"Processes {source_set.name} resources.")
    resources.input_files(lambda: [source_set.resources_src_dir])
    resources.output_dir(source_set.resources_dir)
    resources.do_last(lambda _task: _copy_resources(source_set))
    project.register(resources)

    classes = Task(
        classes_task_name(source_set),
        description=f"Assembles {source_set.name} classes.",
        group=BUILD_GROUP if source_set.name == "main" else None,
    )
    project.register(classes.depends(compile_name, resources_name))


def _clean(project) -> None:
    shutil.rmtree(project.build_dir, ignore_errors=True)


@hookimpl(tryfirst=True)
def apply_convention(project) -> None:
    main = _configure_main(project)
    test = _configure_test(project, main)

    register_source_set_tasks(project, main)
    register_source_set_tasks(project, test)

    project.register_command_task(
        "jar",
        description="Assembles a jar archive containing the main classes.",
        group=BUILD_GROUP,
        source_set=main,
        depends_on=["classes"],
    )
    project.register(
        Task(
            "assemble", description="Assembles the outputs of this project.", group=BUILD_GROUP
        ).depends("jar")
    )
    project.register_command_task(
        "test",
        description="Runs the test suite.",
        group=VERIFICATION_GROUP,
        source_set=test,
        depends_on=["testClasses"],
    )
    project.register(
        Task("check", description="Runs all checks.", group=VERIFICATION_GROUP).depends("test")
    )
    project.register(
        Task(
            "build", description="Assembles and tests this project.", group=BUILD_GROUP
        ).depends("assemble", "check")
    )

    clean = Task("clean", description="Deletes the build directory.", group=BUILD_GROUP)
    project.register(clean.do_last(lambda _task: _clean(project)))
