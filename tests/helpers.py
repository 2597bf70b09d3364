from pathlib import Path
from typing import Dict, Optional, Tuple

from codeintel.chunking import SemanticUnit, estimate_tokens


def write_file(root: Path, rel_path: str, content: str) -> Path:
    full_path = root / rel_path
    full_path.parent.mkdir(parents=True, exist_ok=True)
    full_path.write_text(content, encoding="utf-8")
    return full_path


def make_unit(
    path: str,
    unit_type: str,
    name: Optional[str],
    content: str,
    relations: Optional[Dict[str, Tuple[str, ...]]] = None,
    offset: int = 0,
    tokens: Optional[int] = None,
) -> SemanticUnit:
    return SemanticUnit(
        source_file=Path("/repo") / path,
        relative_path=path,
        type=unit_type,
        name=name,
        content=content,
        offset=offset,
        byte_size=len(content.encode("utf-8")),
        token_estimate=tokens if tokens is not None else estimate_tokens(content),
        identifier=f"{path}::{unit_type}::{name or offset}",
        relations=relations or {},
    )
