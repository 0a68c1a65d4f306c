from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Mapping, Optional, Protocol, Sequence, Tuple, Union


# Raw key/value output of one contributor call, not yet encoded.
ContributionMap = Mapping[str, str]
MergedMap = Dict[str, str]


@dataclass(frozen=True)
class SingleQuery:
    """One logical operation. model_name is None for raw queries."""

    action: str
    model_name: Optional[str] = None
    query: Any = None
    kind: Literal["single"] = field(default="single", init=False)


@dataclass(frozen=True)
class CompactedQuery:
    """
    Several logical operations folded into one physical SQL statement
    (batched point lookups, a transaction batch sent as one round trip).

    Order of `queries` is the batching order.
    """

    queries: Sequence[SingleQuery]
    kind: Literal["compacted"] = field(default="compacted", init=False)

    def __post_init__(self) -> None:
        frozen: Tuple[SingleQuery, ...] = tuple(self.queries)
        if not frozen:
            raise ValueError("CompactedQuery requires at least one query")
        for q in frozen:
            if not isinstance(q, SingleQuery):
                raise TypeError(f"CompactedQuery entries must be SingleQuery, got {type(q).__name__}")
        object.__setattr__(self, "queries", frozen)


QueryInfo = Union[SingleQuery, CompactedQuery]


@dataclass(frozen=True)
class SqlCommenterContext:
    query: QueryInfo


class Contributor(Protocol):
    def __call__(self, context: SqlCommenterContext) -> ContributionMap: ...
