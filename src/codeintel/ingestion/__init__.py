"""
Codebase ingestion package.

Contains the logic that discovers the source files of a codebase before they
are chunked.
"""
from .discovery import DEFAULT_IGNORE_PATTERNS, FileDiscovery

__all__ = ["DEFAULT_IGNORE_PATTERNS", "FileDiscovery"]
