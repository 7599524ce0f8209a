"""
Command-line entry point for the schema redactor.

Loads a message type by import path, validates JSON input against it and
writes the redacted JSON to stdout:

    schema-redactor redact myapp.messages:Account account.json
    schema-redactor redact myapp.messages:Account --jsonl < accounts.jsonl
    schema-redactor plan myapp.messages:Account

Logs go to stderr so stdout only carries redacted output.
"""

import argparse
import importlib
import json
import sys
from typing import Any, Optional, TextIO

import structlog
from pydantic import ValidationError

from schema_redactor.config import settings
from schema_redactor.exceptions import RedactionError
from schema_redactor.logging_config import configure_logging
from schema_redactor.redactor import PlanRegistry, RedactionPlan

logger = structlog.get_logger(__name__)

EXIT_OK = 0
EXIT_INVALID_INPUT = 1
EXIT_CONFIGURATION = 2


def load_message_type(path: str) -> Any:
    """
    Resolve "package.module:Type" (or "module:Outer.Inner") to an object.
    
    Raises:
        ValueError: path is not in module:attribute form
        ImportError: module cannot be imported
        AttributeError: attribute not found in module
    """
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"expected 'module:Type', got {path!r}")
    target: Any = importlib.import_module(module_name)
    for part in attr.split("."):
        target = getattr(target, part)
    return target


def describe_plan(plan: RedactionPlan) -> dict[str, Any]:
    """JSON-friendly view of a plan and its nested plans."""
    return {
        "message_type": plan.message_type.__qualname__ if plan.message_type else None,
        "noop": plan.is_noop,
        "sensitive_fields": [f.name for f in plan.sensitive_fields],
        "nested_fields": {n.field.name: describe_plan(n.plan) for n in plan.nested_fields},
    }


def _redact_json(plan: RedactionPlan, message_type: Any, raw: str) -> str:
    message = message_type.model_validate_json(raw)
    return plan.redact(message).model_dump_json()


def _redact_source(
    plan: RedactionPlan, message_type: Any, source: TextIO, out: TextIO, jsonl: bool
) -> int:
    if not jsonl:
        out.write(_redact_json(plan, message_type, source.read()) + "\n")
        return 1
    
    count = 0
    for line in source:
        if not line.strip():
            continue
        out.write(_redact_json(plan, message_type, line) + "\n")
        count += 1
    return count


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schema-redactor",
        description=f"{settings.APP_NAME}: clear sensitive fields from JSON messages",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {settings.APP_VERSION}"
    )
    parser.add_argument("--log-level", default=None, help=f"default: {settings.LOG_LEVEL}")
    
    sub = parser.add_subparsers(dest="command", required=True)
    
    redact_cmd = sub.add_parser("redact", help="Redact JSON messages of a type")
    redact_cmd.add_argument("message_type", help="Import path, e.g. myapp.messages:Account")
    redact_cmd.add_argument("input", nargs="?", default="-", help="JSON file (default: stdin)")
    redact_cmd.add_argument("--jsonl", action="store_true", help="One JSON message per line")
    
    plan_cmd = sub.add_parser("plan", help="Show the redaction plan for a type")
    plan_cmd.add_argument("message_type", help="Import path, e.g. myapp.messages:Account")
    
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    
    configure_logging(args.log_level or settings.LOG_LEVEL, settings.ENVIRONMENT)
    registry = PlanRegistry(settings=settings)
    
    try:
        message_type = load_message_type(args.message_type)
    except (ValueError, ImportError, AttributeError) as e:
        print(f"Cannot load message type: {e}", file=sys.stderr)
        return EXIT_CONFIGURATION
    
    try:
        plan = registry.get(message_type)
    except RedactionError as e:
        print(f"Cannot plan {args.message_type}: {e}", file=sys.stderr)
        return EXIT_CONFIGURATION
    
    if args.command == "plan":
        print(json.dumps(describe_plan(plan), indent=2))
        return EXIT_OK
    
    try:
        if args.input == "-":
            count = _redact_source(plan, message_type, sys.stdin, sys.stdout, args.jsonl)
        else:
            with open(args.input, encoding="utf-8") as source:
                count = _redact_source(plan, message_type, source, sys.stdout, args.jsonl)
    except ValidationError as e:
        # Input values are left out: they may be the very data being redacted
        locations = [".".join(str(p) for p in err["loc"]) for err in e.errors(include_input=False)]
        print(f"Invalid {args.message_type} input at: {', '.join(locations)}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except RedactionError as e:
        print(f"Redaction failed: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    
    logger.info("Redaction complete", message_type=args.message_type, count=count)
    return EXIT_OK
