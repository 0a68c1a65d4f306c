from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional


class ExitCode(int, Enum):
    CONFIG_INVALID = 10
    INPUT_INVALID = 20
    INTERNAL_ERROR = 50


@dataclass(frozen=True)
class SqlCommenterProblem:
    code: str                 # stable machine code, e.g. "SQLC_TAG_SYNTAX"
    category: str             # "config" | "input" | "runtime" | "internal"
    message: str              # short human message
    details: Dict[str, Any]   # structured details for debugging
    remediation: Optional[str] = None  # actionable next step


class SqlCommenterException(Exception):
    def __init__(
        self,
        problem: SqlCommenterProblem,
        exit_code: ExitCode,
        *,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(problem.message)
        self.problem = problem
        self.exit_code = exit_code
        self.cause = cause


class CommentSyntaxError(ValueError):
    """Raised when a SQL comment does not follow the key='value' grammar."""


def problem_to_dict(p: SqlCommenterProblem) -> Dict[str, Any]:
    d = asdict(p)
    if d.get("remediation") is None:
        d.pop("remediation", None)
    return d
