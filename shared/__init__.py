"""Shared utilities and components for the statistics layer."""

from .config import BaseServiceConfig
from .constants import Environment

__all__ = [
    "Environment",
    "BaseServiceConfig",
]
