"""Classpath manifest files.

A manifest lists the runtime classpath of a secondary test suite, one entry
per line, so a test process started later can rebuild the classpath of the
plugin under test without asking the build for it.

Layout: ``<build-dir>/resources/<suite>/pluginClasspath.txt``.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

from build_common.config import MANIFEST_FILE_NAME
from build_common.logging_config import get_logger

logger = get_logger(__name__)

SEPARATOR = "\n"


def classpath_manifest_dir(build_dir: Path, suite_name: str) -> Path:
    """Directory the manifest for a suite is written to."""
    return build_dir / "resources" / suite_name


def classpath_manifest_path(build_dir: Path, suite_name: str) -> Path:
    """Full path of the manifest for a suite."""
    return classpath_manifest_dir(build_dir, suite_name) / MANIFEST_FILE_NAME


def write_classpath_manifest(entries: Iterable[str | os.PathLike], output_dir: Path) -> Path:
    """Write classpath entries to ``output_dir/pluginClasspath.txt``.

    The output directory (and any missing parents) is created. The file is
    rewritten in full: entries are joined with a single newline, in the
    given order, with no trailing newline. Duplicates are kept.

    Filesystem errors are not caught; they propagate to the caller.

    Args:
        entries: Ordered classpath entries (may be empty)
        output_dir: Directory that receives the manifest

    Returns:
        Path to the written manifest
    """
    lines = [os.fspath(entry) for entry in entries]

    output_dir.mkdir(parents=True, exist_ok=True)
    manifest = output_dir / MANIFEST_FILE_NAME
    manifest.write_text(SEPARATOR.join(lines), encoding="utf-8", newline="")

    logger.debug(f"Wrote {len(lines)} classpath entries to {manifest}")
    return manifest


def read_classpath_manifest(path: Path) -> list[str]:
    """Read a manifest back as a list of classpath entries.

    Blank lines are ignored.
    """
    content = path.read_text(encoding="utf-8")
    return [line for line in content.split(SEPARATOR) if line]
