"""
Language analysis variants.

Each supported language is one :class:`LanguageAnalyzer` subclass; the
chunking engine resolves the variant once from the configured language name.
"""
from __future__ import annotations

from typing import Dict, List, Type

from ..logger import get_logger
from .base import STRUCTURAL_TYPES, LanguageAnalyzer, RawUnit, RelationMap
from .golang import GolangAnalyzer
from .php import PhpAnalyzer
from .python import PythonAnalyzer

log = get_logger(__name__)

DEFAULT_LANGUAGE = "php"

_ANALYZERS: Dict[str, Type[LanguageAnalyzer]] = {
    "php": PhpAnalyzer,
    "python": PythonAnalyzer,
    "golang": GolangAnalyzer,
}
_ALIASES = {"py": "python", "go": "golang"}


def available_languages() -> List[str]:
    return list(_ANALYZERS)


def get_analyzer(language: str) -> LanguageAnalyzer:
    """Return a fresh analyzer for ``language``, falling back to PHP."""
    key = (language or "").strip().lower()
    key = _ALIASES.get(key, key)
    analyzer_cls = _ANALYZERS.get(key)
    if analyzer_cls is None:
        log.warning("language_fallback", language=language, fallback=DEFAULT_LANGUAGE)
        analyzer_cls = _ANALYZERS[DEFAULT_LANGUAGE]
    return analyzer_cls()


__all__ = [
    "STRUCTURAL_TYPES",
    "GolangAnalyzer",
    "LanguageAnalyzer",
    "PhpAnalyzer",
    "PythonAnalyzer",
    "RawUnit",
    "RelationMap",
    "available_languages",
    "get_analyzer",
]
