"""
Common interface for language-specific code analyzers.

An analyzer knows how to recognise the structural elements of one language
with regular expressions and how to pull the symbolic relations (imports,
parents, implemented interfaces) out of a piece of source text.
"""
from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Optional, Pattern, Sequence, Tuple

RelationMap = Dict[str, List[str]]

STRUCTURAL_TYPES = frozenset(
    {"class", "interface", "trait", "enum", "struct", "function", "method"}
)


@dataclass(frozen=True)
class RawUnit:
    """A structural match located in a file before spans are assigned."""

    position: int
    type: str
    text: str
    name: Optional[str] = None


class LanguageAnalyzer(ABC):
    """Base class for the per-language analysis variants."""

    name: str = ""
    fence: str = ""
    file_extensions: Tuple[str, ...] = ()
    exclusion_patterns: Tuple[str, ...] = ()

    def __init__(self) -> None:
        self._compiled: Dict[str, Pattern[str]] = {
            unit_type: re.compile(pattern, re.MULTILINE)
            for unit_type, pattern in self.get_semantic_patterns().items()
        }

    @abstractmethod
    def get_semantic_patterns(self) -> Dict[str, str]:
        """Return regex sources keyed by unit type, in priority order."""

    @abstractmethod
    def extract_dependencies(self, content: str) -> RelationMap:
        """Return the relations declared in ``content`` keyed by relation kind."""

    def get_exclusion_patterns(self) -> List[str]:
        return list(self.exclusion_patterns)

    def get_file_extensions(self) -> List[str]:
        return list(self.file_extensions)

    def identify_semantic_units(self, content: str) -> List[RawUnit]:
        """
        Locate every structural match in ``content`` ordered by position.

        When two patterns match at the same offset only the one declared
        first in :meth:`get_semantic_patterns` is kept.
        """
        found: Dict[int, RawUnit] = {}
        for unit_type, pattern in self._compiled.items():
            for match in pattern.finditer(content):
                if not match.group(0).strip():
                    continue
                position = match.start()
                if position in found:
                    continue
                name = match.groupdict().get("name")
                found[position] = RawUnit(
                    position=position,
                    type=unit_type,
                    text=match.group(0),
                    name=name,
                )
        return [found[position] for position in sorted(found)]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


def split_names(raw: str, separators: Sequence[str] = (",",)) -> List[str]:
    """Split a declaration list such as ``A, B\\C`` into trimmed names."""
    parts = [raw]
    for separator in separators:
        parts = [piece for part in parts for piece in part.split(separator)]
    return [part.strip() for part in parts if part.strip()]


def add_relation(relations: RelationMap, kind: str, names: Sequence[str]) -> None:
    """Append ``names`` under ``kind`` keeping the first occurrence only."""
    bucket = relations.setdefault(kind, [])
    for name in names:
        if name and name not in bucket:
            bucket.append(name)
