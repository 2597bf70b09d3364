"""
Data structures shared by the semantic chunking pipeline.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple


@dataclass(frozen=True)
class SemanticUnit:
    """A contiguous span of one file recognised as a structural element."""

    source_file: Path
    relative_path: str
    type: str
    content: str
    offset: int
    byte_size: int
    token_estimate: int
    identifier: str
    name: Optional[str] = None
    relations: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "relations", MappingProxyType(dict(self.relations)))


@dataclass
class GraphNode:
    """Vertex of the dependency graph; neighbour lists keep insertion order."""

    unit: SemanticUnit
    dependency_ids: List[str] = field(default_factory=list)
    dependent_ids: List[str] = field(default_factory=list)
    weight: float = 0.0

    @property
    def identifier(self) -> str:
        return self.unit.identifier


@dataclass
class Group:
    """Cluster of units rendered together inside a chunk."""

    name: str
    units: List[SemanticUnit] = field(default_factory=list)
    files: List[str] = field(default_factory=list)
    total_size: int = 0
    total_tokens: int = 0

    def add(self, unit: SemanticUnit) -> None:
        self.units.append(unit)
        if unit.relative_path not in self.files:
            self.files.append(unit.relative_path)
        self.total_size += unit.byte_size
        self.total_tokens += unit.token_estimate


@dataclass
class Chunk:
    """Finalized, token-bounded bundle of groups ready for transmission."""

    index: int
    content: str
    files: List[str]
    groups: List[str]
    token_estimate: int
    unit_count: int
    file_count: int
    checksum: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ChunkingReport:
    """Bookkeeping for the most recent chunking run."""

    codebase_path: Optional[Path] = None
    files_discovered: int = 0
    files_processed: int = 0
    failed_files: List[str] = field(default_factory=list)
    unit_count: int = 0
    group_count: int = 0
    chunk_count: int = 0
