"""Tests for convention data models."""

import dataclasses
from pathlib import Path

import pytest

from build_common.config import DEFAULT_REPOSITORY
from build_common.errors import ConfigurationError
from build_common.models.convention import (
    Convention,
    Coordinate,
    FormattingSettings,
    JavaSettings,
    PluginDeclaration,
    PluginRequest,
)


class TestCoordinate:
    """Test Coordinate parsing."""

    def test_parse(self):
        coordinate = Coordinate.parse("org.hamcrest:hamcrest-core:2.2")

        assert coordinate.group == "org.hamcrest"
        assert coordinate.artifact == "hamcrest-core"
        assert coordinate.version == "2.2"
        assert coordinate.classifier is None
        assert coordinate.file_name == "hamcrest-core-2.2.jar"

    def test_parse_with_classifier(self):
        coordinate = Coordinate.parse("com.example:lib:1.0:tests")

        assert coordinate.classifier == "tests"
        assert coordinate.file_name == "lib-1.0-tests.jar"
        assert str(coordinate) == "com.example:lib:1.0:tests"

    @pytest.mark.parametrize("notation", ["", "org.example", "org.example:lib", "a::1.0", "a:b:c:d:e"])
    def test_parse_invalid(self, notation):
        with pytest.raises(ConfigurationError, match="Invalid dependency notation"):
            Coordinate.parse(notation)


class TestPluginRequest:
    """Test PluginRequest."""

    def test_from_string(self):
        assert PluginRequest.from_dict("kotlin-dsl") == PluginRequest("kotlin-dsl")

    def test_from_dict(self):
        request = PluginRequest.from_dict({"id": "com.diffplug.spotless", "version": "6.15.0"})

        assert request.version == "6.15.0"
        assert request.to_dict() == {"id": "com.diffplug.spotless", "version": "6.15.0"}

    def test_missing_id(self):
        with pytest.raises(ConfigurationError, match="without 'id'"):
            PluginRequest.from_dict({"version": "1.0"})


class TestJavaSettings:
    """Test JavaSettings."""

    def test_version_sets_both_compatibilities(self):
        settings = JavaSettings.from_dict({"version": 17})

        assert settings.source_compatibility == "17"
        assert settings.target_compatibility == "17"

    def test_javac_args_defaults(self):
        args = JavaSettings().javac_args()

        assert args[:6] == ["-encoding", "UTF-8", "-source", "11", "-target", "11"]
        assert "-Werror" in args
        assert "-XDcompilePolicy=simple" in args
        assert args[-1] == "-Xplugin:ErrorProne -Xep:MissingOverride:ERROR -Xep:WildcardImport:ERROR"

    def test_javac_args_without_errorprone(self):
        args = JavaSettings(errorprone_errors=(), compiler_args=("-Xlint:all",)).javac_args()

        assert args == ["-encoding", "UTF-8", "-source", "11", "-target", "11", "-Xlint:all"]


class TestFormattingSettings:
    """Test FormattingSettings."""

    def test_disabled_by_default(self):
        assert not FormattingSettings().enabled

    def test_ktlint_only(self):
        formatting = FormattingSettings.from_dict({"ktlint": True})

        assert formatting.enabled
        assert not formatting.java_enabled


class TestPluginDeclaration:
    """Test PluginDeclaration."""

    def test_missing_required_fields(self):
        with pytest.raises(ConfigurationError, match="id, implementation_class"):
            PluginDeclaration.from_dict({"name": "common"})


class TestConvention:
    """Test Convention."""

    def test_minimal(self):
        convention = Convention.from_dict({"group": "org.example", "version": "1.0"})

        assert convention.test_suites == ("functionalTest",)
        assert convention.repositories == ("mavenCentral",)
        assert convention.repository == DEFAULT_REPOSITORY
        assert convention.build_dir == "build"
        assert dict(convention.dependencies) == {}

    @pytest.mark.parametrize("missing", ["group", "version"])
    def test_missing_required_key(self, missing):
        data = {"group": "org.example", "version": "1.0"}
        del data[missing]

        with pytest.raises(ConfigurationError, match=f"missing required key '{missing}'"):
            Convention.from_dict(data)

    def test_dependencies_are_parsed(self):
        convention = Convention.from_dict(
            {
                "group": "org.example",
                "version": "1.0",
                "dependencies": {"implementation": ["org.apache.commons:commons-text:1.10.0"]},
            }
        )

        assert convention.dependencies["implementation"] == (
            Coordinate("org.apache.commons", "commons-text", "1.10.0"),
        )

    def test_dependency_list_must_be_a_list(self):
        with pytest.raises(ConfigurationError, match="must be a list"):
            Convention.from_dict(
                {"group": "g", "version": "1", "dependencies": {"implementation": "a:b:1"}}
            )

    @pytest.mark.parametrize("suite", ["", "functional-test", "1test"])
    def test_invalid_suite_name(self, suite):
        with pytest.raises(ConfigurationError, match="Invalid test suite name"):
            Convention.from_dict({"group": "g", "version": "1", "test_suites": [suite]})

    def test_repository_is_expanded(self):
        convention = Convention.from_dict({"group": "g", "version": "1", "repository": "~/repo"})

        assert convention.repository == Path.home() / "repo"

    def test_is_immutable(self):
        convention = Convention.from_dict(
            {"group": "g", "version": "1", "dependencies": {"api": ["a:b:1"]}}
        )

        with pytest.raises(dataclasses.FrozenInstanceError):
            convention.version = "2"  # type: ignore[misc]
        with pytest.raises(TypeError):
            convention.dependencies["api"] = ()  # type: ignore[index]

    def test_command_for(self):
        convention = Convention.from_dict(
            {"group": "g", "version": "1", "commands": {"test": ["mvn", "test"]}}
        )

        assert convention.command_for("test") == ("mvn", "test")
        assert convention.command_for("jar") is None

    def test_to_dict_roundtrip(self):
        data = {
            "group": "org.example",
            "version": "1.0",
            "plugins": ["kotlin-dsl", {"id": "com.diffplug.spotless", "version": "6.15.0"}],
            "dependencies": {"implementation": ["a:b:1"]},
            "publishing": {
                "plugins": [
                    {"name": "common", "id": "org.example.common", "implementation_class": "a.B"}
                ]
            },
        }
        convention = Convention.from_dict(data)

        assert Convention.from_dict(convention.to_dict()) == convention

    @pytest.mark.parametrize(
        "data, message",
        [
            ({"test_suites": [1]}, "Invalid test suite name '1'"),
            ({"test_suites": "functionalTest"}, "'test_suites' must be an array"),
            ({"java": "17"}, r"\[java\] must be a table"),
            ({"formatting": ["ktlint"]}, r"\[formatting\] must be a table"),
            ({"dependencies": ["a:b:1"]}, r"\[dependencies\] must be a table"),
            ({"publishing": {"plugins": ["org.example.common"]}}, "Published plugin must be a table"),
            ({"publishing": {"plugins": {"id": "x"}}}, "'plugins' must be an array"),
            ({"plugins": [3]}, "Plugin entry without 'id'"),
            ({"repository": 5}, "'repository' must be a string"),
        ],
    )
    def test_wrong_value_types(self, data, message):
        with pytest.raises(ConfigurationError, match=message):
            Convention.from_dict({"group": "g", "version": "1", **data})

    def test_default_repository_not_written(self):
        convention = Convention.from_dict({"group": "g", "version": "1"})

        assert "repository" not in convention.to_dict()
        assert Convention.from_dict(
            {"group": "g", "version": "1", "repository": "/opt/repo"}
        ).to_dict()["repository"] == "/opt/repo"
