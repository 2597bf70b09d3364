"""
Centralized application settings.

The configuration is shared by the chunking engine and the CLI.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - fallback for older interpreters
    import tomli as tomllib  # type: ignore[attr-defined]

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Project-wide settings loaded from env or a TOML file."""

    model_config = SettingsConfigDict(
        env_prefix="CODEINTEL_",
        env_nested_delimiter="__",
        extra="allow",
    )

    codebase_language: str = "php"
    codebase_include_patterns: Optional[str] = None
    codebase_exclude_patterns: Optional[str] = None
    max_recursion_depth: int = Field(default=10, ge=0)
    max_group_tokens: int = Field(default=5000, gt=1)
    chunk_size: int = Field(default=2000, gt=0)
    log_level: str = "INFO"

    def include_patterns(self) -> List[str]:
        return split_patterns(self.codebase_include_patterns)

    def exclude_patterns(self) -> List[str]:
        return split_patterns(self.codebase_exclude_patterns)


_CONFIG_ENV_VAR = "CODEINTEL_CONFIG_PATH"
_DEFAULT_CONFIG_FILE = Path("codeintel_settings.toml")


def split_patterns(raw: Optional[str]) -> List[str]:
    """Split a comma-separated glob list, dropping blanks and duplicates."""
    if not raw:
        return []
    return list(dict.fromkeys(part.strip() for part in raw.split(",") if part.strip()))


def _load_toml_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from the primary TOML file on disk."""
    candidates: List[Path] = []
    if path is not None:
        candidates.append(path)
    config_override = os.getenv(_CONFIG_ENV_VAR)
    if config_override:
        candidates.append(Path(config_override))
    candidates.append(_DEFAULT_CONFIG_FILE)

    for candidate in candidates:
        if candidate.is_file():
            with candidate.open("rb") as handle:
                return tomllib.load(handle)
    return {}


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and value.strip() == "":
        return None
    return value


def _join_patterns(value: Any) -> Optional[str]:
    if isinstance(value, (list, tuple)):
        return ",".join(str(item) for item in value)
    return _blank_to_none(value)


def _flatten_config(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Translate grouped TOML sections into AppSettings keyword arguments."""
    data: Dict[str, Any] = {}

    codebase = raw.get("codebase", {})
    if "language" in codebase:
        data["codebase_language"] = codebase["language"]
    if "include_patterns" in codebase:
        data["codebase_include_patterns"] = _join_patterns(codebase["include_patterns"])
    if "exclude_patterns" in codebase:
        data["codebase_exclude_patterns"] = _join_patterns(codebase["exclude_patterns"])

    chunking = raw.get("chunking", {})
    if "max_recursion_depth" in chunking:
        data["max_recursion_depth"] = int(chunking["max_recursion_depth"])
    if "max_group_tokens" in chunking:
        data["max_group_tokens"] = int(chunking["max_group_tokens"])
    if "chunk_size" in chunking:
        data["chunk_size"] = int(chunking["chunk_size"])

    logging_section = raw.get("logging", {})
    if "level" in logging_section:
        data["log_level"] = str(logging_section["level"]).upper()

    return data


def load_settings(path: Optional[Path] = None) -> AppSettings:
    raw = _load_toml_config(path)
    flattened = _flatten_config(raw)
    return AppSettings(**flattened)


settings = load_settings()
