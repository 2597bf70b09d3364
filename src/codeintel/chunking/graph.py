"""
Dependency graph construction and node weighting.

Nodes are semantic units; an edge ``A -> B`` means that ``A`` refers to ``B``
either through a declared relation (import, parent class, implemented
interface) or because ``B``'s name appears as a word in ``A``'s source.
"""
from __future__ import annotations

import re
from collections import OrderedDict
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from ..analysis import STRUCTURAL_TYPES
from ..logger import get_logger
from .models import GraphNode, SemanticUnit

log = get_logger(__name__)

RELATION_WEIGHTS: Dict[str, float] = {
    "extends": 2.0,
    "implements": 1.5,
    "imports": 1.0,
}

BASE_WEIGHTS: Dict[str, float] = {
    "class": 10.0,
    "struct": 10.0,
    "interface": 8.0,
    "trait": 7.0,
    "function": 5.0,
}
DEFAULT_BASE_WEIGHT = 1.0

# Credits for an edge that only comes from the mention heuristic.
DEPENDENT_CREDIT = 2.0
DEPENDENCY_CREDIT = 1.0

_WORD_RE = re.compile(r"\b[A-Za-z_]\w*\b")
_NAME_SEPARATORS_RE = re.compile(r"[\\./:]+")


def short_name(reference: str) -> str:
    """Return the last segment of a qualified name (``App\\Models\\User`` -> ``User``)."""
    parts = [part for part in _NAME_SEPARATORS_RE.split(reference.strip()) if part]
    return parts[-1] if parts else ""


class DependencyGraph:
    """Insertion-ordered map of identifier to :class:`GraphNode`."""

    def __init__(self) -> None:
        self.nodes: "OrderedDict[str, GraphNode]" = OrderedDict()
        self.declared_weights: Dict[Tuple[str, str], float] = {}

    def __contains__(self, identifier: object) -> bool:
        return identifier in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[GraphNode]:
        return iter(self.nodes.values())

    def get(self, identifier: str) -> Optional[GraphNode]:
        return self.nodes.get(identifier)

    def add_unit(self, unit: SemanticUnit) -> GraphNode:
        node = self.nodes.get(unit.identifier)
        if node is None:
            node = GraphNode(unit=unit)
            self.nodes[unit.identifier] = node
        return node

    def add_edge(self, source_id: str, target_id: str) -> bool:
        """Insert ``source -> target`` symmetrically; returns False for self-loops."""
        if source_id == target_id:
            return False
        source = self.nodes[source_id]
        target = self.nodes[target_id]
        if target_id not in source.dependency_ids:
            source.dependency_ids.append(target_id)
        if source_id not in target.dependent_ids:
            target.dependent_ids.append(source_id)
        return True

    def add_declared_weight(self, source_id: str, target_id: str, weight: float) -> None:
        key = (source_id, target_id)
        self.declared_weights[key] = self.declared_weights.get(key, 0.0) + weight

    def edge_count(self) -> int:
        return sum(len(node.dependency_ids) for node in self.nodes.values())


class NameResolver:
    """
    Resolve symbolic references to node identifiers.

    The short-name index is rebuilt for every graph; resolved names are
    memoized across runs until :meth:`clear` is called. An exact name in the
    current index always wins over a memoized result, and a memoized
    identifier is only returned when it exists in the graph currently
    indexed. Not safe for concurrent use.
    """

    def __init__(self) -> None:
        self._cache: Dict[str, str] = {}
        self._index: "OrderedDict[str, str]" = OrderedDict()
        self._graph: Optional[DependencyGraph] = None

    def __len__(self) -> int:
        return len(self._cache)

    def clear(self) -> None:
        self._cache.clear()

    def index(self, graph: DependencyGraph) -> None:
        self._graph = graph
        self._index = OrderedDict()
        for node in graph:
            name = node.unit.name
            if name and node.unit.type in STRUCTURAL_TYPES and name not in self._index:
                self._index[name] = node.identifier

    def resolve(self, reference: str) -> Optional[str]:
        name = short_name(reference)
        if not name or self._graph is None:
            return None

        identifier = self._index.get(name)
        if identifier is None:
            cached = self._cache.get(name)
            if cached is not None and cached in self._graph:
                return cached
            identifier = next(
                (node_id for indexed, node_id in self._index.items() if name in indexed),
                None,
            )
        if identifier is not None:
            self._cache[name] = identifier
        return identifier


class GraphBuilder:
    """Build a :class:`DependencyGraph` from extracted units."""

    def __init__(self, resolver: Optional[NameResolver] = None) -> None:
        self.resolver = resolver if resolver is not None else NameResolver()

    def build(self, units: Iterable[SemanticUnit]) -> DependencyGraph:
        graph = DependencyGraph()
        for unit in units:
            graph.add_unit(unit)
        self.resolver.index(graph)

        unresolved = self._add_declared_edges(graph)
        self._add_mention_edges(graph)

        if unresolved:
            log.warning(
                "unresolved_relations",
                count=len(unresolved),
                sample=unresolved[:5],
            )
        log.info("dependency_graph_built", nodes=len(graph), edges=graph.edge_count())
        return graph

    def _add_declared_edges(self, graph: DependencyGraph) -> List[str]:
        unresolved: List[str] = []
        for node in list(graph):
            for kind, references in node.unit.relations.items():
                weight = RELATION_WEIGHTS.get(kind)
                if weight is None:
                    continue
                for reference in references:
                    target_id = self.resolver.resolve(reference)
                    if target_id is None:
                        log.debug(
                            "relation_unresolved",
                            unit=node.identifier,
                            kind=kind,
                            reference=reference,
                        )
                        unresolved.append(reference)
                        continue
                    if graph.add_edge(node.identifier, target_id):
                        graph.add_declared_weight(node.identifier, target_id, weight)
        return unresolved

    @staticmethod
    def _add_mention_edges(graph: DependencyGraph) -> None:
        by_name: Dict[str, List[str]] = {}
        for node in graph:
            if node.unit.name and node.unit.type in STRUCTURAL_TYPES:
                by_name.setdefault(node.unit.name, []).append(node.identifier)
        if not by_name:
            return

        for node in list(graph):
            words = dict.fromkeys(_WORD_RE.findall(node.unit.content))
            for word in words:
                for target_id in by_name.get(word, ()):
                    graph.add_edge(node.identifier, target_id)


def weigh_nodes(graph: DependencyGraph) -> None:
    """
    Assign an importance weight to every node.

    Each node starts from its type's base weight. An edge carrying declared
    relations credits their summed weight to both endpoints; a mention-only
    edge credits the referenced node twice as much as the referencing one.
    """
    for node in graph:
        weight = BASE_WEIGHTS.get(node.unit.type, DEFAULT_BASE_WEIGHT)
        for target_id in node.dependency_ids:
            weight += graph.declared_weights.get(
                (node.identifier, target_id), DEPENDENCY_CREDIT
            )
        for source_id in node.dependent_ids:
            weight += graph.declared_weights.get(
                (source_id, node.identifier), DEPENDENT_CREDIT
            )
        node.weight = weight
