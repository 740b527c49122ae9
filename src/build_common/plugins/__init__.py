"""Plugin system for build-common.

Uses Pluggy for plugin discovery and hook management. Bundled conventions
are loaded first, then external ones from the ``build_common`` entry point
group.

    from build_common.plugins import initialize_plugins, apply_conventions
"""

import contextlib
import importlib

import pluggy

from build_common.logging_config import get_logger
from build_common.models.plugin import ConventionInfo
from build_common.plugins.hookspecs import ConventionSpec

logger = get_logger(__name__)


# Conventions bundled with build-common, loaded automatically on initialization
DEFAULT_PLUGINS = (
    "build_common.conventions.java",
    "build_common.conventions.functional_test",
    "build_common.conventions.spotless",
    "build_common.conventions.plugin_publish",
)


# Create plugin manager with build_common namespace
pm = pluggy.PluginManager("build_common")
pm.add_hookspecs(ConventionSpec)

# Track initialization state
_initialized: bool = False
_registered_conventions: dict[str, ConventionInfo] = {}


def _load_default_plugins() -> None:
    """Load conventions bundled with build-common."""
    for plugin_path in DEFAULT_PLUGINS:
        module = importlib.import_module(plugin_path)
        pm.register(module, name=plugin_path)
        logger.debug(f"Loaded plugin: {plugin_path}")


def _load_external_plugins() -> None:
    """Discover and load external conventions via entry points."""
    try:
        num_loaded = pm.load_setuptools_entrypoints("build_common")
        if num_loaded > 0:
            logger.debug(f"Loaded {num_loaded} external plugin(s)")
    except Exception as e:
        logger.warning(f"Error loading external plugins: {e}")


def _register_conventions() -> None:
    global _registered_conventions
    _registered_conventions = {}

    for impl in pm.hook.register_conventions.get_hookimpls():
        data = impl.function()
        if data:
            info = ConventionInfo.from_dict(data, module=impl.plugin_name)
            _registered_conventions[info.name] = info
            logger.debug(f"Registered convention: {info.name}")


def initialize_plugins() -> None:
    """Initialize the plugin system.

    This function is idempotent - calling it multiple times has no effect
    after the first call.
    """
    global _initialized

    if _initialized:
        return

    _load_default_plugins()
    _load_external_plugins()
    _register_conventions()

    _initialized = True
    logger.debug(f"Plugin system initialized with {len(_registered_conventions)} convention(s)")


def reset_plugins() -> None:
    """Reset the plugin system (mainly for testing).

    Unregisters all plugins and marks the system as uninitialized. The next
    call to initialize_plugins() will re-initialize the system.
    """
    global _initialized, _registered_conventions

    for plugin in list(pm.get_plugins()):
        with contextlib.suppress(ValueError):
            pm.unregister(plugin)

    _registered_conventions = {}
    _initialized = False


def get_registered_conventions() -> dict[str, ConventionInfo]:
    """Get all registered conventions.

    Returns:
        Dictionary mapping convention name to ConventionInfo.
    """
    initialize_plugins()
    return _registered_conventions.copy()


def apply_conventions(project) -> None:
    """Apply every loaded convention to a project."""
    initialize_plugins()
    pm.hook.apply_convention(project=project)


__all__ = [
    "pm",
    "DEFAULT_PLUGINS",
    "initialize_plugins",
    "reset_plugins",
    "get_registered_conventions",
    "apply_conventions",
]
