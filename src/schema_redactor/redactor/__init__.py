"""
Redaction engine.

- plan.py: RedactionPlan construction and execution, NOOP_PLAN sentinel
- registry.py: PlanRegistry memoizing one plan per message type
  - get_plan()/redact() use the process-wide default registry
"""

from schema_redactor.redactor.plan import NOOP_PLAN, NestedField, RedactionPlan, build_plan
from schema_redactor.redactor.registry import PlanRegistry, default_registry, get_plan, redact

__all__ = [
    "NOOP_PLAN",
    "NestedField",
    "RedactionPlan",
    "build_plan",
    "PlanRegistry",
    "default_registry",
    "get_plan",
    "redact",
]
