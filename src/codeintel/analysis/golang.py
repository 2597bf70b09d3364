"""Go analyzer."""
from __future__ import annotations

import re
from typing import Dict, List

from .base import LanguageAnalyzer, RelationMap, add_relation

_IMPORT_BLOCK_RE = re.compile(r"^import\s*\(([^)]*)\)", re.MULTILINE)
_IMPORT_LINE_RE = re.compile(r'^import\s+(?:\w+\s+)?"([^"]+)"', re.MULTILINE)
_QUOTED_RE = re.compile(r'"([^"]+)"')
_TYPE_BODY_RE = re.compile(
    r"\btype\s+\w+(?:\[[^\]]*\])?\s+(?:struct|interface)\s*\{([^}]*)\}"
)
_EMBEDDED_RE = re.compile(r"^\s*\*?([A-Za-z_][\w.]*)\s*(?:`[^`]*`)?\s*(?://.*)?$")


class GolangAnalyzer(LanguageAnalyzer):
    name = "golang"
    fence = "go"
    file_extensions = ("go",)
    exclusion_patterns = (
        "vendor/*",
        ".git/*",
        "bin/*",
        "pkg/*",
        "*.test",
        "*.pb.go",
        "node_modules/*",
    )

    def get_semantic_patterns(self) -> Dict[str, str]:
        return {
            "package": r"^package\s+(?P<name>\w+)",
            "import": r'^import\s+(?:\([^)]*\)|(?:\w+\s+)?"[^"]+")',
            "method": r"^func\s+\([^)]*\)\s*(?P<name>\w+)\s*[\[(]",
            "function": r"^func\s+(?P<name>\w+)\s*[\[(]",
            "struct": r"^type\s+(?P<name>\w+)(?:\[[^\]]*\])?\s+struct\s*\{",
            "interface": r"^type\s+(?P<name>\w+)(?:\[[^\]]*\])?\s+interface\s*\{",
            "const": r"^const\s+(?:\([^)]*\)|\w+[^\n]*)",
            "var": r"^var\s+(?:\([^)]*\)|\w+[^\n]*)",
            "section": r"^[ \t]*//\s*SECTION:.*$",
            "comment": r"^/\*[\s\S]*?\*/",
        }

    def extract_dependencies(self, content: str) -> RelationMap:
        relations: RelationMap = {}

        imports: List[str] = []
        for block in _IMPORT_BLOCK_RE.finditer(content):
            imports.extend(_QUOTED_RE.findall(block.group(1)))
        imports.extend(_IMPORT_LINE_RE.findall(content))
        if imports:
            add_relation(relations, "imports", imports)

        # Embedded fields are Go's form of inheritance.
        embedded: List[str] = []
        for body in _TYPE_BODY_RE.finditer(content):
            for line in body.group(1).splitlines():
                match = _EMBEDDED_RE.match(line)
                if match:
                    embedded.append(match.group(1))
        if embedded:
            add_relation(relations, "extends", embedded)

        return relations
