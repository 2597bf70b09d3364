"""
Group size optimization.

Oversized groups are split by file first and, when a single file is still
too large, into sequential pieces of at most half the token ceiling.
"""
from __future__ import annotations

from typing import Dict, List

from ..logger import get_logger
from .models import Group

log = get_logger(__name__)


class GroupSizeOptimizer:
    def __init__(self, max_group_tokens: int = 5000) -> None:
        if max_group_tokens <= 1:
            raise ValueError("max_group_tokens must be greater than one")
        self.max_group_tokens = max_group_tokens

    @property
    def piece_tokens(self) -> int:
        return self.max_group_tokens // 2

    def optimize(self, groups: List[Group]) -> List[Group]:
        optimized: List[Group] = []
        for group in groups:
            if group.total_tokens <= self.max_group_tokens:
                optimized.append(group)
                continue
            pieces = self.split_group(group)
            log.info(
                "group_split",
                group=group.name,
                tokens=group.total_tokens,
                pieces=len(pieces),
            )
            optimized.extend(pieces)
        return optimized

    def split_group(self, group: Group) -> List[Group]:
        result: List[Group] = []
        for file_group in self._split_by_file(group):
            if file_group.total_tokens <= self.max_group_tokens:
                result.append(file_group)
            else:
                result.extend(self._split_by_tokens(file_group))
        return result

    @staticmethod
    def _split_by_file(group: Group) -> List[Group]:
        if len(group.files) <= 1:
            return [group]
        by_file: Dict[str, Group] = {}
        for unit in group.units:
            path = unit.relative_path
            if path not in by_file:
                by_file[path] = Group(name=f"{group.name} [{path}]")
            by_file[path].add(unit)
        return list(by_file.values())

    def _split_by_tokens(self, group: Group) -> List[Group]:
        limit = self.piece_tokens
        pieces: List[Group] = []
        current = Group(name=f"{group.name} (part 1)")
        for unit in group.units:
            if current.units and current.total_tokens + unit.token_estimate > limit:
                pieces.append(current)
                current = Group(name=f"{group.name} (part {len(pieces) + 1})")
            current.add(unit)
        if current.units:
            pieces.append(current)
        return pieces
