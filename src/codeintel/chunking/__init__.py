"""
Chunking utilities for semantic codebase ingestion.

Splits source files into semantic units, links them through a dependency
graph and packs related units into token-bounded chunks.
"""

from .extractor import UnitExtractor, estimate_tokens
from .graph import DependencyGraph, GraphBuilder, NameResolver, weigh_nodes
from .models import Chunk, ChunkingReport, GraphNode, Group, SemanticUnit
from .optimizer import GroupSizeOptimizer
from .packer import ChunkPacker
from .semantic_chunker import SemanticChunker

__all__ = [
    "Chunk",
    "ChunkPacker",
    "ChunkingReport",
    "DependencyGraph",
    "GraphBuilder",
    "GraphNode",
    "Group",
    "GroupSizeOptimizer",
    "NameResolver",
    "SemanticChunker",
    "SemanticUnit",
    "UnitExtractor",
    "estimate_tokens",
    "weigh_nodes",
]
