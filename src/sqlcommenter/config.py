"""
Commenter config loading.

Loads a YAML/JSON file and returns a typed config plus the contributor list it
describes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml

from .contributors import query_info, query_tags, static_tags
from .types import Contributor


def _flag(d: Dict[str, Any], key: str, default: bool = True) -> bool:
    value = d.get(key, default)
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be true or false, got {value!r}")
    return value


@dataclass(frozen=True)
class CommenterConfig:
    """Which contributors to install and the default tags they carry."""

    static_tags: Dict[str, str] = field(default_factory=dict)
    include_query_info: bool = True
    include_query_tags: bool = True

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> CommenterConfig:
        tags = d.get("static_tags") or {}
        if not isinstance(tags, dict):
            raise ValueError(f"static_tags must be a mapping, got {type(tags).__name__}")
        for k, v in tags.items():
            if not isinstance(k, str) or not isinstance(v, str):
                raise ValueError(
                    f"static_tags keys and values must be strings, got {k!r}: {v!r} "
                    "(quote numbers and empty values in YAML, e.g. version: \"1.10\")"
                )
        return cls(
            static_tags=dict(tags),
            include_query_info=_flag(d, "include_query_info"),
            include_query_tags=_flag(d, "include_query_tags"),
        )


def load_commenter_config(path: str) -> CommenterConfig:
    """
    Load a commenter configuration from a YAML or JSON file.

    Example:

        static_tags:
          application: my-app
          version: 1.0.0
        include_query_info: true
        include_query_tags: true
    """
    p = Path(path)
    text = p.read_text(encoding="utf-8")
    obj = yaml.safe_load(text)
    if not isinstance(obj, dict):
        raise ValueError(f"Commenter config must be a YAML/JSON object, got {type(obj).__name__}")
    return CommenterConfig.from_dict(obj)


def build_contributors(config: CommenterConfig) -> List[Contributor]:
    """Defaults first, request-scoped tags last so they override."""
    contributors: List[Contributor] = []
    if config.static_tags:
        contributors.append(static_tags(config.static_tags))
    if config.include_query_info:
        contributors.append(query_info())
    if config.include_query_tags:
        contributors.append(query_tags())
    return contributors
