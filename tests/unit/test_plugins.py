"""Tests for the convention plugin system."""

from unittest.mock import patch

from build_common import hookimpl
from build_common.plugins import (
    DEFAULT_PLUGINS,
    get_registered_conventions,
    initialize_plugins,
    pm,
    reset_plugins,
)


class TestPluginInitialization:
    """Tests for plugin initialization."""

    def test_bundled_conventions_registered(self):
        conventions = get_registered_conventions()

        assert set(conventions) == {"java", "functional-test", "spotless", "plugin-publish"}
        assert conventions["java"].module == "build_common.conventions.java"

    def test_initialize_plugins_idempotent(self):
        initialize_plugins()
        count = len(pm.get_plugins())

        initialize_plugins()

        assert len(pm.get_plugins()) == count

    def test_reset_plugins(self):
        initialize_plugins()
        assert len(pm.get_plugins()) >= len(DEFAULT_PLUGINS)

        reset_plugins()

        assert pm.get_plugins() == set()

    def test_external_plugin_errors_are_logged(self, caplog):
        with patch.object(pm, "load_setuptools_entrypoints", side_effect=RuntimeError("bad dist")):
            initialize_plugins()

        assert "Error loading external plugins: bad dist" in caplog.text
        assert "java" in get_registered_conventions()


class ExtraConvention:
    """A convention registered the way an external package would be."""

    @hookimpl
    def register_conventions(self):
        return {"name": "javadoc", "description": "Adds a javadoc task"}


class TestExternalConventions:
    def test_registered_plugin_is_listed(self):
        def load_extra(group):
            pm.register(ExtraConvention(), name="extra")
            return 1

        with patch.object(pm, "load_setuptools_entrypoints", side_effect=load_extra):
            conventions = get_registered_conventions()

        assert conventions["javadoc"].description == "Adds a javadoc task"
        assert conventions["javadoc"].module == "extra"
