"""build-common: shared build conventions for JVM plugin projects."""

import pluggy

from build_common.classpath.manifest import read_classpath_manifest, write_classpath_manifest
from build_common.config import __version__
from build_common.logging_config import get_logger

# Convenience export for plugins: from build_common import hookimpl
hookimpl = pluggy.HookimplMarker("build_common")

__all__ = [
    "__version__",
    "hookimpl",
    "get_logger",
    "read_classpath_manifest",
    "write_classpath_manifest",
]
