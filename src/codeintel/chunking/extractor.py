"""
Semantic unit extraction.

Turns the raw content of one file into an ordered list of
:class:`SemanticUnit` objects. Unit boundaries are inferred from the position
of consecutive structural matches: every unit runs from its own match to the
next one, the last unit runs to the end of the file.
"""
from __future__ import annotations

import hashlib
import math
import re
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple

from ..analysis import STRUCTURAL_TYPES, LanguageAnalyzer
from ..logger import get_logger
from .models import SemanticUnit

log = get_logger(__name__)

_LINE_COMMENT_PREFIXES: Tuple[str, ...] = ("#", "//", '"""', "'''")
# A leading "*" is a comment continuation only when followed by space, "/" or nothing.
_STAR_CONTINUATION_RE = re.compile(r"^\*(?:\s|/|$)")


def estimate_tokens(content: str) -> int:
    """
    Approximate the number of model tokens in ``content``.

    Blank and comment lines are cheaper (six characters per token) than code
    lines (four characters per token). Lines inside a ``/* ... */`` block
    count as comments. The result is never below one.
    """
    total = 0
    in_block = False
    for line in content.split("\n"):
        stripped = line.strip()
        if in_block:
            is_comment = True
            in_block = "*/" not in stripped
        elif stripped.startswith("/*"):
            is_comment = True
            in_block = "*/" not in stripped[2:]
        else:
            is_comment = (
                not stripped
                or stripped.startswith(_LINE_COMMENT_PREFIXES)
                or bool(_STAR_CONTINUATION_RE.match(stripped))
            )
        total += math.ceil(len(line) / (6 if is_comment else 4))
    return max(1, total)


def make_identifier(relative_path: str, unit_type: str, name: Optional[str], content: str) -> str:
    if name:
        return f"{relative_path}::{unit_type}::{name}"
    digest = hashlib.sha1(content.encode("utf-8")).hexdigest()[:12]
    return f"{relative_path}::{unit_type}::{digest}"


class UnitExtractor:
    """Extract semantic units from file contents with a language analyzer."""

    def __init__(self, analyzer: LanguageAnalyzer) -> None:
        self.analyzer = analyzer

    def extract(self, path: Path, relative_path: str, content: str) -> List[SemanticUnit]:
        raw_units = self.analyzer.identify_semantic_units(content)
        if not raw_units:
            log.debug("no_structure_detected", file=relative_path)
            return [
                self._build_unit(path, relative_path, "file", None, content, 0, set())
            ]

        spans: List[Tuple[str, Optional[str], int, int]] = []
        first = raw_units[0].position
        if content[:first].strip():
            spans.append(("preamble", None, 0, first))
        for idx, raw in enumerate(raw_units):
            end = raw_units[idx + 1].position if idx + 1 < len(raw_units) else len(content)
            spans.append((raw.type, raw.name, raw.position, end))

        seen: Set[str] = set()
        units = [
            self._build_unit(path, relative_path, unit_type, name, content[start:end], start, seen)
            for unit_type, name, start, end in spans
        ]
        log.debug("units_extracted", file=relative_path, units=len(units))
        return units

    def _build_unit(
        self,
        path: Path,
        relative_path: str,
        unit_type: str,
        name: Optional[str],
        text: str,
        offset: int,
        seen: Set[str],
    ) -> SemanticUnit:
        identifier = make_identifier(relative_path, unit_type, name, text)
        if identifier in seen:
            identifier = f"{identifier}@{offset}"
        seen.add(identifier)

        relations: Dict[str, Tuple[str, ...]] = {}
        if unit_type in STRUCTURAL_TYPES:
            relations = {
                kind: tuple(names)
                for kind, names in self.analyzer.extract_dependencies(text).items()
                if names
            }

        return SemanticUnit(
            source_file=path,
            relative_path=relative_path,
            type=unit_type,
            name=name,
            content=text,
            offset=offset,
            byte_size=len(text.encode("utf-8")),
            token_estimate=estimate_tokens(text),
            identifier=identifier,
            relations=relations,
        )
