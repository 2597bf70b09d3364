"""
Semantic chunking of codebases for large-language-model ingestion.
"""

from .chunking import Chunk, SemanticChunker
from .version import __version__

__all__ = ["Chunk", "SemanticChunker", "__version__"]
