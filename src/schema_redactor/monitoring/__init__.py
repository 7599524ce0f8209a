"""Monitoring and metrics instrumentation for the schema redactor.

Exports custom Prometheus metrics for plan construction and redaction.
"""

from schema_redactor.monitoring.metrics import (
    redaction_errors_total,
    redaction_plans_built_total,
    redactions_total,
)

__all__ = [
    "redaction_plans_built_total",
    "redactions_total",
    "redaction_errors_total",
]
