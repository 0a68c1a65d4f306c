# src/sqlcommenter/cli.py
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List

from .comment import extract_comment, parse_comment
from .config import CommenterConfig, build_contributors, load_commenter_config
from .contributors import static_tags
from .errors import (
    CommentSyntaxError,
    ExitCode,
    SqlCommenterException,
    SqlCommenterProblem,
    problem_to_dict,
)
from .pipeline import annotate_sql
from .types import Contributor, SingleQuery

logger = logging.getLogger(__name__)


# =============================================================================
# Helpers
# =============================================================================

def _print_json(payload: Dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False, sort_keys=True, default=str))


def _raise_input_error(code: str, message: str, *, details: Dict[str, Any], remediation: str) -> None:
    raise SqlCommenterException(
        SqlCommenterProblem(
            code=code,
            category="input",
            message=message,
            details=details,
            remediation=remediation,
        ),
        ExitCode.INPUT_INVALID,
    )


def _load_config(path: str) -> CommenterConfig:
    try:
        return load_commenter_config(path)
    except FileNotFoundError as e:
        raise SqlCommenterException(
            SqlCommenterProblem(
                code="SQLC_CONFIG_NOT_FOUND",
                category="config",
                message=f"Config not found: {path}",
                details={"path": path},
                remediation="Verify the path is correct and the file exists.",
            ),
            ExitCode.CONFIG_INVALID,
            cause=e,
        )
    except Exception as e:
        raise SqlCommenterException(
            SqlCommenterProblem(
                code="SQLC_CONFIG_INVALID",
                category="config",
                message=f"Failed to load config: {path}",
                details={"path": path, "error": repr(e)},
                remediation="Ensure the file is a YAML/JSON object with a 'static_tags' mapping.",
            ),
            ExitCode.CONFIG_INVALID,
            cause=e,
        )


def _parse_tags(raw: List[str]) -> Dict[str, str]:
    tags: Dict[str, str] = {}
    for item in raw:
        key, sep, value = item.partition("=")
        if not sep or not key:
            _raise_input_error(
                "SQLC_TAG_SYNTAX",
                f"Invalid --tag: {item!r}",
                details={"tag": item},
                remediation="Pass tags as KEY=VALUE, e.g. --tag route=/users.",
            )
        tags[key] = value
    return tags


# =============================================================================
# Commands
# =============================================================================

def cmd_annotate(args: argparse.Namespace) -> int:
    contributors: List[Contributor] = []
    if args.config:
        contributors.extend(build_contributors(_load_config(args.config)))
    overrides = _parse_tags(args.tag or [])
    if overrides:
        contributors.append(static_tags(overrides))

    query = SingleQuery(action=args.action, model_name=args.model)
    sql = annotate_sql(contributors, query, args.sql)

    if args.format == "json":
        _print_json({"ok": True, "sql": sql})
    else:
        print(sql)
    return 0


def cmd_parse(args: argparse.Namespace) -> int:
    comment = extract_comment(args.sql)
    try:
        tags = parse_comment(comment or "")
    except CommentSyntaxError as e:
        raise SqlCommenterException(
            SqlCommenterProblem(
                code="SQLC_COMMENT_SYNTAX",
                category="input",
                message="Trailing comment is not in key='value' form",
                details={"comment": comment, "error": str(e)},
                remediation="Only comments produced by `sqlcommenter annotate` can be parsed.",
            ),
            ExitCode.INPUT_INVALID,
            cause=e,
        )

    if args.format == "json":
        _print_json({"ok": True, "tags": tags})
    else:
        for key in sorted(tags):
            print(f"{key}={tags[key]}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sqlcommenter",
        description="Attach key='value' tag comments to SQL statements.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    sub = parser.add_subparsers(dest="cmd")

    p_annotate = sub.add_parser("annotate", help="Append a tag comment to a statement")
    p_annotate.add_argument("--sql", required=True, help="SQL statement text")
    p_annotate.add_argument("--config", help="YAML/JSON commenter config")
    p_annotate.add_argument("--tag", action="append", metavar="KEY=VALUE", help="Extra tag (repeatable, wins over config)")
    p_annotate.add_argument("--model", default=None, help="Model name of the query (omit for raw queries)")
    p_annotate.add_argument("--action", default="queryRaw", help="Operation name (default: queryRaw)")
    p_annotate.add_argument("--format", choices=["text", "json"], default="text")
    p_annotate.set_defaults(func=cmd_annotate)

    p_parse = sub.add_parser("parse", help="Decode the tag comment at the end of a statement")
    p_parse.add_argument("--sql", required=True, help="Annotated SQL statement text")
    p_parse.add_argument("--format", choices=["text", "json"], default="text")
    p_parse.set_defaults(func=cmd_parse)

    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Entry point used by the console script: `from sqlcommenter.cli import main`.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if not getattr(args, "cmd", None):
        parser.print_help()
        return 2

    try:
        return int(args.func(args))
    except SqlCommenterException as e:
        payload = {"ok": False, "error": problem_to_dict(e.problem), "exit_code": int(e.exit_code)}
        fmt = getattr(args, "format", "text")
        if fmt == "json":
            _print_json(payload)
        else:
            err = payload["error"]
            print(f"ERROR[{err.get('code', 'SQLC_ERROR')}]: {err.get('message')}", file=sys.stderr)
            if err.get("remediation"):
                print(f"REMEDIATION: {err['remediation']}", file=sys.stderr)
            print(f"DETAILS: {err.get('details', {})}", file=sys.stderr)
        return int(e.exit_code)
    except Exception as e:
        logger.debug("Unhandled error in %s", args.cmd, exc_info=True)
        problem = SqlCommenterProblem(
            code="SQLC_INTERNAL_ERROR",
            category="internal",
            message="Unexpected error",
            details={"error": repr(e)},
        )
        if getattr(args, "format", "text") == "json":
            _print_json({"ok": False, "error": problem_to_dict(problem), "exit_code": int(ExitCode.INTERNAL_ERROR)})
        else:
            print(f"ERROR[{problem.code}]: {problem.message}: {e!r}", file=sys.stderr)
        return int(ExitCode.INTERNAL_ERROR)
