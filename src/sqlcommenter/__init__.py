"""Structured key='value' comments for outgoing SQL statements."""

from .comment import append_comment, format_comment, merge_contributions, parse_comment
from .pipeline import annotate_sql, build_comment
from .runner import run_contributors
from .types import (
    CompactedQuery,
    ContributionMap,
    Contributor,
    MergedMap,
    QueryInfo,
    SingleQuery,
    SqlCommenterContext,
)

__all__ = [
    "annotate_sql",
    "build_comment",
    "run_contributors",
    "append_comment",
    "format_comment",
    "merge_contributions",
    "parse_comment",
    "CompactedQuery",
    "ContributionMap",
    "Contributor",
    "MergedMap",
    "QueryInfo",
    "SingleQuery",
    "SqlCommenterContext",
]
