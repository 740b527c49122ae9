"""Tests for plugin descriptor generation and validation."""

import pytest

from build_common.models.convention import PluginDeclaration
from build_common.tasks.descriptor import (
    PluginDescriptorTask,
    ValidatePluginsTask,
    descriptor_content,
    validate_plugins,
)


def declaration(**overrides):
    values = {
        "name": "common",
        "id": "org.example.common",
        "implementation_class": "org.example.gradle.CommonPlugin",
        "display_name": "Common plugin",
    }
    values.update(overrides)
    return PluginDeclaration(**values)


class TestPluginDescriptorTask:
    def test_descriptor_content(self):
        assert descriptor_content(declaration()) == (
            "implementation-class=org.example.gradle.CommonPlugin\n"
        )

    def test_writes_one_file_per_plugin(self, tmp_path):
        plugins = [declaration(), declaration(name="other", id="org.example.other")]
        task = PluginDescriptorTask(plugins, tmp_path / "resources" / "main")

        task.execute()

        descriptors = tmp_path / "resources" / "main" / "META-INF" / "gradle-plugins"
        assert sorted(p.name for p in descriptors.iterdir()) == [
            "org.example.common.properties",
            "org.example.other.properties",
        ]

    def test_removes_stale_descriptors(self, tmp_path):
        descriptors = tmp_path / "META-INF" / "gradle-plugins"
        descriptors.mkdir(parents=True)
        (descriptors / "org.example.renamed.properties").write_text("implementation-class=Old\n")

        PluginDescriptorTask([declaration()], tmp_path).execute()

        assert [p.name for p in descriptors.iterdir()] == ["org.example.common.properties"]

    def test_declares_outputs_and_inputs(self, tmp_path):
        task = PluginDescriptorTask([declaration()], tmp_path)

        assert task.outputs == [tmp_path / "META-INF" / "gradle-plugins"]
        assert task.input_properties["plugins"] == {
            "org.example.common": "org.example.gradle.CommonPlugin"
        }


class TestValidatePlugins:
    def test_valid(self):
        assert validate_plugins([declaration()], ["functionalTest"], ["main", "functionalTest"]) == []

    @pytest.mark.parametrize(
        "overrides, problem",
        [
            ({"id": "common"}, "invalid id 'common'"),
            ({"id": "org.example.bad id"}, "invalid id"),
            ({"implementation_class": "org.example.1Plugin"}, "invalid implementation class"),
            ({"display_name": ""}, "missing display name"),
        ],
    )
    def test_invalid_declaration(self, overrides, problem):
        problems = validate_plugins([declaration(**overrides)], [], ["main"])

        assert len(problems) == 1
        assert problem in problems[0]

    def test_duplicate_id(self):
        problems = validate_plugins([declaration(), declaration(name="again")], [], [])

        assert problems == ["Plugin 'again': duplicate id 'org.example.common'"]

    def test_unknown_test_source_set(self):
        problems = validate_plugins([declaration()], ["integrationTest"], ["main", "test"])

        assert problems == ["Test source set 'integrationTest' is not defined"]

    def test_task_raises_with_all_problems(self):
        task = ValidatePluginsTask(
            [declaration(display_name="")],
            ["integrationTest"],
            known_source_sets=lambda: ["main"],
        )

        with pytest.raises(ValueError, match="Plugin validation failed") as exc_info:
            task.execute()
        assert "missing display name" in str(exc_info.value)
        assert "integrationTest" in str(exc_info.value)
