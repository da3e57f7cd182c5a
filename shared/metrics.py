"""Unified metrics helpers.

Provides thin wrappers around prometheus_client primitives with (optional)
service name prefixing and basic naming validation. Keeps registry default so
multi-process mode can be configured externally.
"""

from __future__ import annotations

import re
from typing import Sequence

from prometheus_client import Counter, Histogram

_NAME_RE = re.compile(r"^[a-z_][a-z0-9_]*$")


def _validate(name: str) -> str:
    if not _NAME_RE.match(name):
        raise ValueError(
            f"Invalid metric name '{name}'. Use snake_case alphanumerics/underscores."
        )
    return name


def _prefix(name: str, service: str | None) -> str:
    if service and not name.startswith(service + "_"):
        return f"{service}_{name}"
    return name


def get_counter(
    name: str,
    documentation: str,
    service: str | None = None,
    labelnames: Sequence[str] = (),
) -> Counter:
    return Counter(_validate(_prefix(name, service)), documentation, labelnames)


def get_histogram(
    name: str, documentation: str, service: str | None = None
) -> Histogram:
    return Histogram(_validate(_prefix(name, service)), documentation)


__all__ = [
    "get_counter",
    "get_histogram",
]
