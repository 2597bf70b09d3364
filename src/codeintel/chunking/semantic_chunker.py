"""
Semantic chunking of whole codebases.

Partitions a codebase into dependency-coherent, token-bounded chunks that can
be sent to a language model one at a time:

files -> units -> dependency graph -> weighted graph -> groups
      -> size-optimized groups -> chunks
"""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Set

from ..analysis import LanguageAnalyzer, get_analyzer
from ..ingestion import FileDiscovery
from ..logger import get_logger
from ..settings import AppSettings, settings as default_settings
from .extractor import UnitExtractor
from .graph import GraphBuilder, NameResolver, weigh_nodes
from .models import Chunk, ChunkingReport, SemanticUnit
from .optimizer import GroupSizeOptimizer
from .packer import ChunkPacker
from .traversal import build_root_groups, group_leftovers

log = get_logger(__name__)


class SemanticChunker:
    """Create semantic chunks for one codebase snapshot per call."""

    def __init__(
        self,
        settings: Optional[AppSettings] = None,
        analyzer: Optional[LanguageAnalyzer] = None,
        discovery: Optional[FileDiscovery] = None,
    ) -> None:
        self.settings = settings or default_settings
        self.analyzer = analyzer or get_analyzer(self.settings.codebase_language)
        self.discovery = discovery or FileDiscovery()
        self.extractor = UnitExtractor(self.analyzer)
        self.resolver = NameResolver()
        self.last_report = ChunkingReport()

    def clear_cache(self) -> None:
        """Forget memoized name resolutions from previous runs."""
        self.resolver.clear()

    def include_patterns(self) -> List[str]:
        configured = self.settings.include_patterns()
        if configured:
            return configured
        return [f"*.{ext}" for ext in self.analyzer.get_file_extensions()]

    def exclude_patterns(self) -> List[str]:
        combined = self.analyzer.get_exclusion_patterns() + self.settings.exclude_patterns()
        return list(dict.fromkeys(combined))

    def create_semantic_chunks(
        self, codebase_path: Path | str, max_chunk_size: Optional[int] = None
    ) -> List[Chunk]:
        """
        Partition the codebase under ``codebase_path`` into chunks.

        Returns an empty list, after logging why, when the path is not a
        directory or when no file or unit was found. Files that cannot be
        read or analyzed are logged, recorded in :attr:`last_report` and
        skipped.
        """
        root = Path(codebase_path)
        target_size = max_chunk_size or self.settings.chunk_size
        self.last_report = report = ChunkingReport(codebase_path=root)
        log.info(
            "semantic_chunking_started",
            path=str(root),
            language=self.analyzer.name,
            max_chunk_size=target_size,
        )

        if not root.exists():
            log.error("codebase_path_not_found", path=str(root))
            return []
        if not root.is_dir():
            log.error("codebase_path_not_directory", path=str(root))
            return []

        files = self.discovery.find_files(
            root, self.include_patterns(), self.exclude_patterns()
        )
        report.files_discovered = len(files)
        if not files:
            log.warning("no_files_found", path=str(root))
            return []

        units = self._extract_units(root, files, report)
        report.unit_count = len(units)
        if not units:
            log.warning("no_units_extracted", path=str(root), files=len(files))
            return []

        graph = GraphBuilder(self.resolver).build(units)
        weigh_nodes(graph)

        visited: Set[str] = set()
        groups = build_root_groups(graph, visited, self.settings.max_recursion_depth)
        groups.extend(group_leftovers(graph, visited))
        groups = GroupSizeOptimizer(self.settings.max_group_tokens).optimize(groups)
        report.group_count = len(groups)

        chunks = ChunkPacker(target_size).pack(groups)
        report.chunk_count = len(chunks)
        log.info(
            "semantic_chunks_created",
            path=str(root),
            files=report.files_processed,
            failed=len(report.failed_files),
            units=len(units),
            groups=len(groups),
            chunks=len(chunks),
        )
        return chunks

    def _extract_units(
        self, root: Path, files: List[Path], report: ChunkingReport
    ) -> List[SemanticUnit]:
        units: List[SemanticUnit] = []
        for path in files:
            relative = path.relative_to(root).as_posix()
            try:
                content = self._read_file(path)
                file_units = self.extractor.extract(path, relative, content)
            except Exception as exc:
                log.error("file_processing_failed", file=relative, error=str(exc))
                report.failed_files.append(relative)
                continue
            units.extend(file_units)
            report.files_processed += 1
        return units

    @staticmethod
    def _read_file(path: Path) -> str:
        return path.read_text(encoding="utf-8", errors="replace")
