"""
Reader for comments produced by format_comment.

Used by log processors and the `sqlcommenter parse` command to recover the
tags attached to a statement.
"""

from __future__ import annotations

from typing import Dict, Optional

from ..errors import CommentSyntaxError
from .core import COMMENT_CLOSE, COMMENT_OPEN, SEGMENT_DELIMITER
from .encoding import decode_component


def extract_comment(sql: str) -> Optional[str]:
    """Return the trailing /*...*/ block of `sql`, or None if it has none."""
    tail = sql.rstrip()
    if not tail.endswith(COMMENT_CLOSE):
        return None
    start = tail.rfind(COMMENT_OPEN, 0, len(tail) - len(COMMENT_CLOSE))
    if start < 0:
        return None
    return tail[start:]


def parse_comment(comment: str) -> Dict[str, str]:
    if not comment:
        return {}
    if not (comment.startswith(COMMENT_OPEN) and comment.endswith(COMMENT_CLOSE)) or len(comment) < 4:
        raise CommentSyntaxError(f"Comment must be wrapped in /* */: {comment!r}")

    body = comment[len(COMMENT_OPEN):-len(COMMENT_CLOSE)]
    if not body:
        return {}

    tags: Dict[str, str] = {}
    for segment in body.split(SEGMENT_DELIMITER):
        key, sep, raw_value = segment.partition("=")
        if not sep or not key:
            raise CommentSyntaxError(f"Segment is not key='value': {segment!r}")
        if len(raw_value) < 2 or raw_value[0] != "'" or raw_value[-1] != "'":
            raise CommentSyntaxError(f"Value for {key!r} is not single-quoted: {raw_value!r}")
        tags[decode_component(key)] = decode_component(raw_value[1:-1])
    return tags
