"""
Source file discovery.

Walks a codebase in a deterministic order and applies include/exclude glob
patterns so the chunking engine always sees the same ordered file list for
the same snapshot.
"""
from __future__ import annotations

import os
from fnmatch import fnmatch
from pathlib import Path
from typing import List, Sequence

from ..logger import get_logger

log = get_logger(__name__)

DEFAULT_IGNORE_PATTERNS: Sequence[str] = (
    ".git",
    ".hg",
    ".svn",
    ".idea",
    ".vscode",
    ".DS_Store",
    "__pycache__",
    ".mypy_cache",
    ".pytest_cache",
    ".ruff_cache",
    ".venv",
    "node_modules",
)


def _matches_any(value: str, patterns: Sequence[str]) -> bool:
    return any(fnmatch(value, pattern) for pattern in patterns)


def _is_excluded(relative: str, patterns: Sequence[str]) -> bool:
    name = relative.rsplit("/", 1)[-1]
    for pattern in patterns:
        if fnmatch(relative, pattern) or fnmatch(name, pattern):
            return True
        # "vendor/*" also prunes "vendor" itself and anything below it.
        if pattern.endswith("/*") and (relative + "/").startswith(pattern[:-1]):
            return True
    return False


class FileDiscovery:
    """Deterministic file finder driven by glob patterns."""

    def __init__(self, ignore_dirs: Sequence[str] = DEFAULT_IGNORE_PATTERNS) -> None:
        self.ignore_dirs = tuple(ignore_dirs)

    def find_files(
        self,
        root: Path,
        include_patterns: Sequence[str],
        exclude_patterns: Sequence[str] = (),
    ) -> List[Path]:
        """
        Return files under ``root`` matching ``include_patterns``.

        Include and exclude patterns are matched against the POSIX path
        relative to ``root`` and against the file name. Results are sorted by
        relative path.
        """
        if not root.is_dir():
            raise NotADirectoryError(f"Not a directory: {root}")

        files: List[Path] = []
        for current, dirs, filenames in os.walk(root):
            current_path = Path(current)
            base = current_path.relative_to(root).as_posix()
            prefix = "" if base == "." else f"{base}/"
            dirs[:] = sorted(
                d
                for d in dirs
                if not _matches_any(d, self.ignore_dirs)
                and not _is_excluded(prefix + d, exclude_patterns)
            )
            for filename in sorted(filenames):
                relative = prefix + filename
                if include_patterns and not (
                    _matches_any(filename, include_patterns)
                    or _matches_any(relative, include_patterns)
                ):
                    continue
                if _is_excluded(relative, exclude_patterns):
                    continue
                files.append(current_path / filename)
        files.sort(key=lambda path: path.relative_to(root).as_posix())

        log.debug(
            "files_discovered",
            root=str(root),
            count=len(files),
            include=list(include_patterns),
            exclude=list(exclude_patterns),
        )
        return files
