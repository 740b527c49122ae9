"""Task history for up-to-date checks.

After a task with outputs succeeds, a fingerprint of its inputs is stored.
On the next invocation the task is up-to-date when the fingerprint matches
and every output still exists.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path

from build_common.logging_config import get_logger
from build_common.tasks.base import Task

logger = get_logger(__name__)


def _hash_path(digest, path: Path) -> None:
    digest.update(str(path).encode("utf-8"))
    if path.is_file():
        stat = path.stat()
        digest.update(f":{stat.st_size}:{stat.st_mtime_ns}".encode())
    elif path.is_dir():
        for child in sorted(p for p in path.rglob("*") if p.is_file()):
            stat = child.stat()
            relative = child.relative_to(path).as_posix()
            digest.update(f":{relative}:{stat.st_size}:{stat.st_mtime_ns}".encode())
    else:
        digest.update(b":missing")
    digest.update(b"\0")


def fingerprint(task: Task) -> str:
    """SHA-256 over the task's input properties and input files (in order)."""
    digest = hashlib.sha256()
    digest.update(type(task).__name__.encode("utf-8"))
    digest.update(json.dumps(task.input_properties, sort_keys=True, default=str).encode("utf-8"))
    for path in task.resolve_inputs():
        _hash_path(digest, path)
    return digest.hexdigest()


class TaskHistory:
    """Fingerprints of the last successful run of each task, kept in a JSON file."""

    def __init__(self, path: Path):
        self.path = path
        self._entries: dict[str, str] = {}
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable task history {self.path}: {e}")
            return
        if isinstance(data, dict):
            self._entries = {str(k): str(v) for k, v in data.items()}

    def get(self, task_name: str) -> str | None:
        return self._entries.get(task_name)

    def record(self, task_name: str, value: str) -> None:
        self._entries[task_name] = value

    def forget(self, task_name: str) -> None:
        self._entries.pop(task_name, None)

    def is_up_to_date(self, task: Task, current: str) -> bool:
        """Check a task's fingerprint and outputs against the stored run."""
        if not task.has_outputs:
            return False
        if self._entries.get(task.name) != current:
            return False
        missing = [p for p in task.outputs if not p.exists()]
        if missing:
            logger.debug(f"{task.name}: output {missing[0]} has been removed")
            return False
        return True

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._entries, indent=2, sort_keys=True), encoding="utf-8")
