"""Classpath resolution and the plugin classpath manifest."""

from build_common.classpath.manifest import (
    classpath_manifest_path,
    read_classpath_manifest,
    write_classpath_manifest,
)

__all__ = [
    "classpath_manifest_path",
    "read_classpath_manifest",
    "write_classpath_manifest",
]
