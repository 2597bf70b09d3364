"""PHP analyzer."""
from __future__ import annotations

import re
from typing import Dict

from .base import LanguageAnalyzer, RelationMap, add_relation, split_names

_NAMESPACE_RE = re.compile(r"^\s*namespace\s+([\w\\]+)\s*;", re.MULTILINE)
_USE_RE = re.compile(r"^\s*use\s+([\w\\]+)(?:\s+as\s+(\w+))?\s*;", re.MULTILINE)
_EXTENDS_RE = re.compile(
    r"\b(?:class|interface)\s+\w+\s+extends\s+([\w\\]+(?:\s*,\s*[\w\\]+)*)"
)
_IMPLEMENTS_RE = re.compile(
    r"\bclass\s+\w+(?:\s+extends\s+[\w\\]+)?\s+implements\s+([\w\\,\s]+?)\s*\{"
)


class PhpAnalyzer(LanguageAnalyzer):
    name = "php"
    fence = "php"
    file_extensions = ("php",)
    exclusion_patterns = (
        "vendor/*",
        "node_modules/*",
        "tests/*",
        "var/*",
        "cache/*",
        "logs/*",
        ".git/*",
    )

    def get_semantic_patterns(self) -> Dict[str, str]:
        return {
            "namespace": r"^[ \t]*namespace\s+(?P<name>[\w\\]+)\s*;",
            "import": r"^[ \t]*use\s+[\w\\]+(?:\s+as\s+\w+)?\s*;",
            "class": (
                r"^[ \t]*(?:(?:abstract|final|readonly)\s+)*class\s+(?P<name>\w+)"
                r"(?:\s+extends\s+[\w\\]+)?(?:\s+implements\s+[\w\\\s,]+)?\s*\{"
            ),
            "interface": r"^[ \t]*interface\s+(?P<name>\w+)(?:\s+extends\s+[\w\\\s,]+)?\s*\{",
            "trait": r"^[ \t]*trait\s+(?P<name>\w+)\s*\{",
            "enum": r"^[ \t]*enum\s+(?P<name>\w+)(?:\s*:\s*\w+)?(?:\s+implements\s+[\w\\\s,]+)?\s*\{",
            "method": (
                r"^[ \t]*(?:(?:public|protected|private|static|abstract|final)\s+)+"
                r"function\s+&?(?P<name>\w+)\s*\("
            ),
            "function": r"^[ \t]*function\s+&?(?P<name>\w+)\s*\(",
            "section": r"^[ \t]*//\s*SECTION:.*$",
            "comment": r"^[ \t]*/\*\*[\s\S]*?\*/",
        }

    def extract_dependencies(self, content: str) -> RelationMap:
        relations: RelationMap = {}

        namespace = _NAMESPACE_RE.search(content)
        if namespace:
            add_relation(relations, "namespace", [namespace.group(1)])

        imports = [match.group(1) for match in _USE_RE.finditer(content)]
        if imports:
            add_relation(relations, "imports", imports)

        extends = _EXTENDS_RE.search(content)
        if extends:
            add_relation(relations, "extends", split_names(extends.group(1)))

        implements = _IMPLEMENTS_RE.search(content)
        if implements:
            add_relation(relations, "implements", split_names(implements.group(1)))

        return relations
