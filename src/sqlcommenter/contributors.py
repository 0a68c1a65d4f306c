"""
Ready-made contributors.

None of these are part of the comment pipeline itself; they are ordinary
functions of the Contributor shape that hosts can put in their list.
"""

from __future__ import annotations

import re
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Callable, Dict, Iterator, Mapping, Optional

from .types import CompactedQuery, ContributionMap, Contributor, SingleQuery, SqlCommenterContext

_QUERY_TAGS: ContextVar[Mapping[str, str]] = ContextVar("sqlcommenter_query_tags", default={})

# W3C trace-context: version-traceid-parentid-flags, lowercase hex.
_TRACEPARENT_RE = re.compile(r"^([0-9a-f]{2})-([0-9a-f]{32})-([0-9a-f]{16})-([0-9a-f]{2})$")
_SAMPLED_FLAG = 0x01


def static_tags(tags: Mapping[str, str]) -> Contributor:
    """Contribute the same fixed tags (application, version, ...) for every query."""
    fixed = dict(tags)

    def contribute(context: SqlCommenterContext) -> ContributionMap:
        return dict(fixed)

    return contribute


@contextmanager
def with_query_tags(tags: Mapping[str, str]) -> Iterator[None]:
    """
    Make `tags` visible to query_tags() for queries issued inside the block.

    Nested blocks layer over the enclosing ones, inner keys winning.
    """
    token = _QUERY_TAGS.set({**_QUERY_TAGS.get(), **tags})
    try:
        yield
    finally:
        _QUERY_TAGS.reset(token)


def query_tags() -> Contributor:
    def contribute(context: SqlCommenterContext) -> ContributionMap:
        return dict(_QUERY_TAGS.get())

    return contribute


def _sampled_traceparent(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    m = _TRACEPARENT_RE.match(value)
    if not m:
        return None
    version, trace_id, parent_id, flags = m.groups()
    if version == "ff" or trace_id == "0" * 32 or parent_id == "0" * 16:
        return None
    if not int(flags, 16) & _SAMPLED_FLAG:
        return None
    return value


def trace_context(get_traceparent: Callable[[], Optional[str]]) -> Contributor:
    """
    Contribute `traceparent` for sampled traces.

    The host passes a callable that resolves the current traceparent header
    from its own tracing setup.
    """

    def contribute(context: SqlCommenterContext) -> ContributionMap:
        traceparent = _sampled_traceparent(get_traceparent())
        if traceparent is None:
            return {}
        return {"traceparent": traceparent}

    return contribute


def _single_tags(query: SingleQuery) -> Dict[str, str]:
    tags = {"action": query.action}
    if query.model_name is not None:
        tags["model"] = query.model_name
    return tags


def query_info() -> Contributor:
    """
    Contribute `model` and `action` of the query being executed.

    A compacted query is tagged `model=batch` with its `batch_size`; `action`
    is added only when every query in the batch performs the same one.
    """

    def contribute(context: SqlCommenterContext) -> ContributionMap:
        query = context.query
        if isinstance(query, SingleQuery):
            return _single_tags(query)
        if isinstance(query, CompactedQuery):
            tags = {"model": "batch", "batch_size": str(len(query.queries))}
            actions = {q.action for q in query.queries}
            if len(actions) == 1:
                tags["action"] = actions.pop()
            return tags
        raise TypeError(f"Unsupported query info: {type(query).__name__}")

    return contribute
