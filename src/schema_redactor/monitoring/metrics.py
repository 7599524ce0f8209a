"""Custom Prometheus metrics for the redaction engine.

Alert rules should be configured for:
- redaction_errors_total (any increase means a schema/plan mismatch)
"""

from prometheus_client import Counter

# === Plan Metrics ===

redaction_plans_built_total = Counter(
    "redaction_plans_built_total",
    "Total redaction plans built by registries",
    ["noop"],
)
"""
Plans built counter.

Labels:
- noop: true (type needs no redaction), false (type has sensitive or nested fields)

A steadily increasing value after warm-up means registries are being
recreated instead of shared.
"""

# === Execution Metrics ===

redactions_total = Counter(
    "redactions_total",
    "Total messages redacted by message type",
    ["message_type"],
)
"""
Redactions counter by message type. No-op plans are not counted.

Labels:
- message_type: qualified class name of the redacted message
"""

redaction_errors_total = Counter(
    "redaction_errors_total",
    "Total fatal redaction engine errors by error type",
    ["error_type"],
)
"""
Fatal errors counter.

Labels:
- error_type: ConfigurationError, CyclicSchemaError, ExecutionInconsistencyError

Alert thresholds:
- CRITICAL: any increase
"""
