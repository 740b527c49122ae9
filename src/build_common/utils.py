"""Utility functions for build-common."""

from __future__ import annotations

import os
from collections.abc import Iterable
from typing import Any, TypeVar

from expandvars import expand

T = TypeVar("T")


def expandvars_dict(data: dict[str, Any], environ: dict[str, str] | None = None) -> dict[str, Any]:
    """Recursively expand all string values in a dictionary.

    Variables are looked up in ``environ`` (the process environment by default).
    """
    env = os.environ if environ is None else environ

    def expand_item(item: Any) -> Any:
        if isinstance(item, str):
            return expand(item, environ=env)
        if isinstance(item, dict):
            return expandvars_dict(item, environ=env)
        if isinstance(item, list):
            return [expand_item(i) for i in item]
        return item

    return {key: expand_item(value) for key, value in data.items()}


def ordered_union(*groups: Iterable[T]) -> list[T]:
    """Concatenate groups keeping the first occurrence of each item."""
    seen: set[T] = set()
    result: list[T] = []
    for group in groups:
        for item in group:
            if item not in seen:
                seen.add(item)
                result.append(item)
    return result


def capitalize(name: str) -> str:
    """Upper-case the first character only (``functionalTest`` -> ``FunctionalTest``)."""
    return name[:1].upper() + name[1:]


def describe_suite(suite: str) -> str:
    """Short label for a test suite (``functionalTest`` -> ``functional``)."""
    if suite.endswith("Test") and suite != "Test":
        return suite[: -len("Test")]
    return suite
