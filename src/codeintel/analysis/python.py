"""Python analyzer."""
from __future__ import annotations

import re
from typing import Dict, List

from .base import LanguageAnalyzer, RelationMap, add_relation, split_names

_FROM_IMPORT_RE = re.compile(
    r"^\s*from\s+([\w.]+)\s+import\s+(\([^)]*\)|[^\n#]+)", re.MULTILINE
)
_IMPORT_RE = re.compile(r"^\s*import\s+([\w.]+(?:\s*,\s*[\w.]+)*)", re.MULTILINE)
_CLASS_BASES_RE = re.compile(r"\bclass\s+\w+\s*\(([^)]*)\)\s*:")

_IGNORED_BASES = {"object"}


class PythonAnalyzer(LanguageAnalyzer):
    name = "python"
    fence = "python"
    file_extensions = ("py",)
    exclusion_patterns = (
        "venv/*",
        ".venv/*",
        "env/*",
        "__pycache__/*",
        "*.pyc",
        ".git/*",
        "dist/*",
        "build/*",
        "*.egg-info/*",
    )

    def get_semantic_patterns(self) -> Dict[str, str]:
        # Docstrings follow their definition, so they are not split out.
        return {
            "import": (
                r"^[ \t]*(?:from\s+[\w.]+\s+import\s+(?:\([^)]*\)|[^\n]+)"
                r"|import\s+[\w.]+[^\n]*)"
            ),
            "decorator": r"^[ \t]*@[\w.]+(?:\([^)]*\))?",
            "class": r"^[ \t]*class\s+(?P<name>\w+)\s*(?:\([^)]*\))?\s*:",
            "method": r"^[ \t]+(?:async\s+)?def\s+(?P<name>\w+)\s*\(",
            "function": r"^(?:async\s+)?def\s+(?P<name>\w+)\s*\(",
            "section": r"^[ \t]*#\s*SECTION:.*$",
        }

    def extract_dependencies(self, content: str) -> RelationMap:
        relations: RelationMap = {}

        imports: List[str] = []
        for match in _FROM_IMPORT_RE.finditer(content):
            module = match.group(1)
            names = match.group(2).strip().strip("()")
            for name in split_names(names, separators=(",", "\n")):
                symbol = name.split(" as ")[0].strip()
                if symbol and symbol != "*":
                    imports.append(f"{module}.{symbol}")
        for match in _IMPORT_RE.finditer(content):
            imports.extend(split_names(match.group(1)))
        if imports:
            add_relation(relations, "imports", imports)

        bases_match = _CLASS_BASES_RE.search(content)
        if bases_match:
            bases = [
                base
                for base in split_names(bases_match.group(1))
                if "=" not in base and base not in _IGNORED_BASES
            ]
            if bases:
                add_relation(relations, "extends", bases)

        return relations
