"""
Host-facing entry point.

    sql = annotate_sql(contributors, SingleQuery("findMany", "User"), 'SELECT "id" FROM "User"')

Runs the contributors, merges their maps, formats the comment and appends it.
A contributor error propagates to the caller; deciding whether to run the
query uncommented is the host's call.
"""

from __future__ import annotations

import logging
from typing import Sequence

from .comment import append_comment, format_comment, merge_contributions
from .runner import run_contributors
from .types import Contributor, QueryInfo, SqlCommenterContext

logger = logging.getLogger(__name__)


def build_comment(contributors: Sequence[Contributor], context: SqlCommenterContext) -> str:
    contributions = run_contributors(contributors, context)
    merged = merge_contributions(contributions)
    logger.debug("Merged %d keys from %d contributors", len(merged), len(contributors))
    return format_comment(merged)


def annotate_sql(contributors: Sequence[Contributor], query: QueryInfo, sql: str) -> str:
    comment = build_comment(contributors, SqlCommenterContext(query=query))
    if not comment:
        logger.debug("No tags contributed; statement left unchanged")
    return append_comment(sql, comment)
