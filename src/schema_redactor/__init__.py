"""
Schema-driven redaction for immutable pydantic messages.

Clears fields that a message schema marks as sensitive and recursively redacts
nested messages, producing a new immutable value:
- Plans are derived once per message type from declarative field metadata
- Plans are cached per registry and shared read-only across callers
- Types with nothing to redact short-circuit to a shared no-op plan

Architecture: pydantic message types + cached redaction plans + structlog/Prometheus
"""

__version__ = "0.1.0"
