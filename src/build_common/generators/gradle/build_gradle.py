"""build.gradle.kts generation from a convention.

Renders the same setup build-common runs natively as a Gradle Kotlin DSL
script, for projects that build with Gradle itself.
"""

from __future__ import annotations

from build_common.config import BUILD_GROUP, VERIFICATION_GROUP
from build_common.models.convention import Convention, PluginRequest
from build_common.tasks.manifest import manifest_task_name
from build_common.utils import describe_suite

INDENT = "    "


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("$", "\\$")
    return f'"{escaped}"'


def _plugin_line(plugin: PluginRequest) -> str:
    # core plugins without a dot are referenced by accessor
    if "." not in plugin.id:
        return f"`{plugin.id}`"
    line = f"id({_quote(plugin.id)})"
    if plugin.version:
        line += f" version {_quote(plugin.version)}"
    return line


def _block(name: str, lines: list[str], depth: int = 0) -> list[str]:
    pad = INDENT * depth
    body = [f"{pad}{INDENT}{line}" if line else "" for line in lines]
    return [f"{pad}{name} {{", *body, f"{pad}}}"]


def _list_of(values) -> str:
    return f"listOf({', '.join(_quote(v) for v in values)})"


def _java_version(version: str) -> str:
    return f"JavaVersion.VERSION_{version.replace('.', '_')}"


def _suite_blocks(convention: Convention) -> list[str]:
    lines: list[str] = []
    for suite in convention.test_suites:
        lines += [
            f"val {suite} by sourceSets.creating {{",
            f"{INDENT}compileClasspath += sourceSets.main.get().output + configurations.testRuntimeClasspath",
            f"{INDENT}runtimeClasspath += output + compileClasspath",
            "}",
            "",
        ]
    return lines


def _dependency_lines(convention: Convention) -> list[str]:
    builtin = {
        "api",
        "implementation",
        "compileOnly",
        "runtimeOnly",
        "testImplementation",
        "testCompileOnly",
        "testRuntimeOnly",
    }
    lines = []
    for configuration, coordinates in convention.dependencies.items():
        accessor = configuration if configuration in builtin else _quote(configuration)
        for coordinate in coordinates:
            lines.append(f"{accessor}({_quote(coordinate.notation)})")
    for configuration, files in convention.files.items():
        accessor = configuration if configuration in builtin else _quote(configuration)
        lines.append(f"{accessor}(files({', '.join(_quote(f) for f in files)}))")
    return lines


def _compile_block(convention: Convention) -> list[str]:
    java = convention.java
    body = [
        f"options.encoding = {_quote(java.encoding)}",
        f"options.compilerArgs = {_list_of(java.compiler_args)}",
    ]
    if java.errorprone_errors:
        checks = [f"{INDENT}{_quote(check)}," for check in java.errorprone_errors]
        body += _block("options.errorprone", ["error(", *checks, ")"])
    return _block("tasks.withType<JavaCompile>().configureEach", body)


def _suite_task_blocks(convention: Convention) -> list[str]:
    lines: list[str] = []
    for suite in convention.test_suites:
        task_var = f"{suite}Task"
        manifest_task = manifest_task_name(suite)
        lines += [
            f'val {task_var} = tasks.register<Test>("{suite}") {{',
            f'{INDENT}description = "Runs the {describe_suite(suite)} tests."',
            f'{INDENT}group = "{VERIFICATION_GROUP}"',
            f"{INDENT}testClassesDirs = {suite}.output.classesDirs",
            f"{INDENT}classpath = {suite}.runtimeClasspath",
            f"{INDENT}mustRunAfter(tasks.test)",
            f"{INDENT}dependsOn({manifest_task})",
            "}",
            "",
            f'val {manifest_task} = tasks.register<Task>("{manifest_task}") {{',
            f'{INDENT}description = "Creates a manifest file with the plugin classpath."',
            f'{INDENT}group = "{BUILD_GROUP}"',
            f'{INDENT}val outputDir = file("$buildDir/resources/{suite}")',
            f"{INDENT}inputs.files({suite}.runtimeClasspath)",
            f"{INDENT}outputs.dir(outputDir)",
            f"{INDENT}doLast {{",
            f"{INDENT * 2}outputDir.mkdirs()",
            f'{INDENT * 2}file("$outputDir/pluginClasspath.txt").writeText(',
            f'{INDENT * 3}{suite}.runtimeClasspath.joinToString("\\n"),',
            f"{INDENT * 2})",
            f"{INDENT}}}",
            "}",
            "",
        ]
    if convention.test_suites:
        deps = ", ".join(f"{suite}Task" for suite in convention.test_suites)
        lines += _block("tasks.check", [f"dependsOn({deps})"]) + [""]
    return lines


def _spotless_block(convention: Convention) -> list[str]:
    formatting = convention.formatting
    if not formatting.enabled:
        return []
    body: list[str] = []
    if formatting.java_enabled:
        java: list[str] = []
        if formatting.license_header_file:
            java.append(f"licenseHeaderFile({_quote(formatting.license_header_file)})")
        if formatting.google_java_format:
            step = f"googleJavaFormat({_quote(formatting.google_java_format)})"
            java.append(f"{step}.aosp()" if formatting.aosp else step)
        body += _block("java", java) + [""]
    if formatting.ktlint:
        body += _block("kotlin", ["ktlint()"]) + [""]
    if formatting.ktlint_gradle:
        body += _block("kotlinGradle", ["ktlint()"]) + [""]
    if body and body[-1] == "":
        body.pop()
    return _block("spotless", body) + [""]


def _gradle_plugin_block(convention: Convention) -> list[str]:
    publishing = convention.publishing
    if not publishing.plugins and not publishing.website:
        return []
    body: list[str] = []
    if publishing.website:
        body.append(f"website.set({_quote(publishing.website)})")
    if publishing.vcs_url:
        body.append(f"vcsUrl.set({_quote(publishing.vcs_url)})")
    plugins: list[str] = []
    for plugin in publishing.plugins:
        decl = [
            f"id = {_quote(plugin.id)}",
            f"implementationClass = {_quote(plugin.implementation_class)}",
        ]
        if plugin.display_name:
            decl.append(f"displayName = {_quote(plugin.display_name)}")
        if plugin.description:
            decl.append(f"description = {_quote(plugin.description)}")
        if plugin.tags:
            decl.append(f"tags.set({_list_of(plugin.tags)})")
        plugins += _block(f"create({_quote(plugin.name)})", decl)
    if plugins:
        body += _block("plugins", plugins)
    if publishing.test_source_sets:
        body.append(f"testSourceSets({', '.join(publishing.test_source_sets)})")
    return _block("gradlePlugin", body)


def generate_build_gradle(convention: Convention) -> str:
    """Generate build.gradle.kts content for a convention.

    Args:
        convention: The project convention

    Returns:
        Complete build.gradle.kts file content as a string
    """
    lines: list[str] = []
    if convention.java.errorprone_errors:
        lines += ["import net.ltgt.gradle.errorprone.errorprone", ""]

    lines += _block("plugins", [_plugin_line(p) for p in convention.plugins]) + [""]
    lines += _block("repositories", [f"{r}()" for r in convention.repositories]) + [""]
    lines += [f"group = {_quote(convention.group)}", f"version = {_quote(convention.version)}", ""]
    lines += _suite_blocks(convention)

    dependencies = _dependency_lines(convention)
    if dependencies:
        lines += _block("dependencies", dependencies) + [""]

    java = convention.java
    lines += _block(
        "java",
        [
            f"sourceCompatibility = {_java_version(java.source_compatibility)}",
            f"targetCompatibility = {_java_version(java.target_compatibility)}",
        ],
    ) + [""]
    lines += _compile_block(convention) + [""]
    lines += _block("tasks.withType<Test>().configureEach", ["useJUnitPlatform()"]) + [""]
    lines += _suite_task_blocks(convention)
    lines += _spotless_block(convention)
    lines += _gradle_plugin_block(convention)

    while lines and lines[-1] == "":
        lines.pop()
    return "\n".join(lines) + "\n"
