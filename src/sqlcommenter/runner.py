from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import List, Sequence

from .types import ContributionMap, Contributor, SqlCommenterContext

logger = logging.getLogger(__name__)


def _contributor_name(contributor: Contributor) -> str:
    return getattr(contributor, "__qualname__", None) or type(contributor).__name__


def _check_contribution(result: object, contributor: Contributor, position: int) -> ContributionMap:
    if not isinstance(result, Mapping):
        raise TypeError(
            f"Contributor #{position} ({_contributor_name(contributor)}) must return a mapping, "
            f"got {type(result).__name__}"
        )
    for key, value in result.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise TypeError(
                f"Contributor #{position} ({_contributor_name(contributor)}) returned a non-string "
                f"entry: {key!r}={value!r}"
            )
    return result


def run_contributors(
    contributors: Sequence[Contributor],
    context: SqlCommenterContext,
) -> List[ContributionMap]:
    """
    Call each contributor once, in order, with the same context.

    Contributors run sequentially on the calling thread. An exception raised
    by a contributor is re-raised unchanged and no further contributors run.
    """
    results: List[ContributionMap] = []
    for position, contributor in enumerate(contributors):
        try:
            result = contributor(context)
        except Exception:
            logger.warning(
                "Contributor #%d (%s) failed; aborting comment generation",
                position,
                _contributor_name(contributor),
                exc_info=True,
            )
            raise
        results.append(_check_contribution(result, contributor, position))
    return results
