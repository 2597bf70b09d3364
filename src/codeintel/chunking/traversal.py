"""
Root selection, bounded subgraph collection and leftover grouping.
"""
from __future__ import annotations

from typing import Dict, List, Set, Tuple

from ..logger import get_logger
from .graph import DependencyGraph
from .models import GraphNode, Group

log = get_logger(__name__)

ROOT_TYPES = frozenset({"class", "interface", "trait", "struct"})

# Dependents are only followed this close to the root.
DEPENDENT_DEPTH_LIMIT = 2


def select_roots(graph: DependencyGraph) -> List[GraphNode]:
    """Return traversal anchors ordered by descending weight, ties by insertion."""
    candidates = [node for node in graph if node.unit.type in ROOT_TYPES]
    if not candidates:
        candidates = list(graph)
    return sorted(candidates, key=lambda node: -node.weight)


def group_name(node: GraphNode) -> str:
    unit = node.unit
    label = unit.name or unit.identifier.rsplit("::", 1)[-1]
    return f"{unit.type.capitalize()}: {label} ({unit.relative_path})"


def collect_subgraph(
    graph: DependencyGraph,
    root_id: str,
    visited: Set[str],
    max_depth: int,
) -> List[str]:
    """
    Collect the identifiers reachable from ``root_id`` in visit order.

    Dependencies are followed up to ``max_depth`` edges away from the root,
    dependents only while the current depth is below
    :data:`DEPENDENT_DEPTH_LIMIT`. ``visited`` is shared by every traversal
    of one run and is updated in place, so a node lands in one group only.
    """
    collected: List[str] = []
    stack: List[Tuple[str, int]] = [(root_id, 0)]
    while stack:
        node_id, depth = stack.pop()
        if node_id in visited:
            continue
        visited.add(node_id)
        collected.append(node_id)

        if depth >= max_depth:
            continue
        node = graph.nodes[node_id]
        neighbours = [dep for dep in node.dependency_ids if dep not in visited]
        if depth < DEPENDENT_DEPTH_LIMIT:
            neighbours.extend(dep for dep in node.dependent_ids if dep not in visited)
        for neighbour_id in reversed(neighbours):
            stack.append((neighbour_id, depth + 1))
    return collected


def build_root_groups(
    graph: DependencyGraph,
    visited: Set[str],
    max_depth: int,
) -> List[Group]:
    groups: List[Group] = []
    for root in select_roots(graph):
        if root.identifier in visited:
            continue
        group = Group(name=group_name(root))
        for node_id in collect_subgraph(graph, root.identifier, visited, max_depth):
            group.add(graph.nodes[node_id].unit)
        groups.append(group)
    log.debug("root_groups_built", groups=len(groups), visited=len(visited))
    return groups


def group_leftovers(graph: DependencyGraph, visited: Set[str]) -> List[Group]:
    """Bucket every node that no traversal reached into per-file groups."""
    by_file: Dict[str, Group] = {}
    for node in graph:
        if node.identifier in visited:
            continue
        path = node.unit.relative_path
        group = by_file.get(path)
        if group is None:
            group = by_file[path] = Group(name=f"File: {path}")
        group.add(node.unit)
        visited.add(node.identifier)
    if by_file:
        log.debug("leftover_groups_built", groups=len(by_file))
    return list(by_file.values())
