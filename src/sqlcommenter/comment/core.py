from __future__ import annotations

from typing import Iterable, List

from ..types import ContributionMap, MergedMap
from .encoding import encode_component, encode_value

COMMENT_OPEN = "/*"
COMMENT_CLOSE = "*/"
SEGMENT_DELIMITER = ","


def merge_contributions(maps: Iterable[ContributionMap]) -> MergedMap:
    """
    Fold contribution maps in order. A later map overrides an earlier one on
    a shared key (last write wins), so a defaults contributor can be layered
    under request-scoped ones.
    """
    merged: MergedMap = {}
    for m in maps:
        for key, value in m.items():
            merged[key] = value
    return merged


def format_comment(merged: MergedMap) -> str:
    """
    Render `/*k1='v1',k2='v2'*/`, keys sorted by their encoded text.

    Returns "" for an empty map.
    """
    if not merged:
        return ""

    encoded = sorted((encode_component(k), encode_value(v)) for k, v in merged.items())
    segments: List[str] = [f"{k}='{v}'" for k, v in encoded]
    return COMMENT_OPEN + SEGMENT_DELIMITER.join(segments) + COMMENT_CLOSE


def append_comment(sql: str, comment: str) -> str:
    """
    Append `comment` after all existing text, separated by one space.

    The statement is never inspected: a trailing `;` or whitespace stays where
    it is. An empty comment returns `sql` unchanged.
    """
    if not comment:
        return sql
    return f"{sql} {comment}"
