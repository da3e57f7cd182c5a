from .client import CountingBackend, HttpCountingBackend
from .query import build_query

__all__ = ["CountingBackend", "HttpCountingBackend", "build_query"]
