"""
Greedy chunk packing and rendering.
"""
from __future__ import annotations

import hashlib
from pathlib import PurePosixPath
from typing import Dict, List

from ..logger import get_logger
from .models import Chunk, Group, SemanticUnit

log = get_logger(__name__)

FENCE_LANGUAGES: Dict[str, str] = {
    ".php": "php",
    ".py": "python",
    ".go": "go",
    ".js": "javascript",
    ".ts": "typescript",
    ".html": "html",
    ".css": "css",
    ".md": "markdown",
    ".json": "json",
    ".yml": "yaml",
    ".yaml": "yaml",
    ".sql": "sql",
    ".sh": "bash",
}


def content_checksum(content: str) -> str:
    return hashlib.md5(content.encode("utf-8")).hexdigest()


class ChunkPacker:
    """Largest-first bin packing of groups under a soft token target."""

    def __init__(self, max_chunk_size: int) -> None:
        if max_chunk_size <= 0:
            raise ValueError("max_chunk_size must be positive")
        self.max_chunk_size = max_chunk_size

    def pack(self, groups: List[Group]) -> List[Chunk]:
        ordered = sorted(groups, key=lambda group: -group.total_tokens)
        chunks: List[Chunk] = []
        current: List[Group] = []
        current_tokens = 0
        for group in ordered:
            if current and current_tokens + group.total_tokens > self.max_chunk_size:
                chunks.append(self.finalize(current, len(chunks) + 1))
                current = []
                current_tokens = 0
            current.append(group)
            current_tokens += group.total_tokens
        if current:
            chunks.append(self.finalize(current, len(chunks) + 1))
        return chunks

    def finalize(self, groups: List[Group], index: int) -> Chunk:
        by_file: Dict[str, List[SemanticUnit]] = {}
        for group in groups:
            for unit in group.units:
                by_file.setdefault(unit.relative_path, []).append(unit)

        lines = [f"# Semantic chunk {index}", ""]
        lines.append("Groups: " + "; ".join(group.name for group in groups))
        for path, units in by_file.items():
            # sorted() is stable, so equal offsets keep insertion order.
            ordered = sorted(units, key=lambda unit: unit.offset)
            fence = FENCE_LANGUAGES.get(PurePosixPath(path).suffix.lower(), "")
            body = "".join(unit.content for unit in ordered).rstrip("\n")
            lines.extend(["", f"## {path}", "", f"```{fence}", body, "```"])
        content = "\n".join(lines) + "\n"

        unit_count = sum(len(units) for units in by_file.values())
        chunk = Chunk(
            index=index,
            content=content,
            files=list(by_file),
            groups=[group.name for group in groups],
            token_estimate=sum(group.total_tokens for group in groups),
            unit_count=unit_count,
            file_count=len(by_file),
            checksum=content_checksum(content),
        )
        log.debug(
            "chunk_finalized",
            index=index,
            tokens=chunk.token_estimate,
            units=unit_count,
            files=chunk.file_count,
        )
        return chunk
