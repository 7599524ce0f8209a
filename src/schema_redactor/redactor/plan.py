"""
Redaction plans: per-type description of what to clear and where to recurse.

A plan is built once per message type from its field descriptors and is
immutable afterwards, so it can be shared by every caller and every parent
plan. Types that need no redaction all map to the NOOP_PLAN singleton.
"""

from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

import structlog
from pydantic import BaseModel

from schema_redactor.exceptions import ExecutionInconsistencyError, RedactionError
from schema_redactor.messages.schema import FieldDescriptor, builder_from, describe_fields
from schema_redactor.monitoring.metrics import redaction_errors_total, redactions_total

logger = structlog.get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class NestedField:
    """A nested message field paired with the plan for its type."""
    
    field: FieldDescriptor
    plan: "RedactionPlan"


@dataclass(frozen=True)
class RedactionPlan:
    """
    Immutable, reusable redaction plan for one message type.
    
    Attributes:
        message_type: Model class the plan applies to (None for NOOP_PLAN)
        sensitive_fields: Fields cleared to their absent/default value
        nested_fields: Nested message fields redacted with their own plan
        record_metrics: Count executions in Prometheus
    """
    
    message_type: Optional[type[BaseModel]]
    sensitive_fields: tuple[FieldDescriptor, ...] = ()
    nested_fields: tuple[NestedField, ...] = ()
    record_metrics: bool = False
    
    @property
    def is_noop(self) -> bool:
        return not self.sensitive_fields and not self.nested_fields
    
    def redact(self, message: Optional[M]) -> Optional[M]:
        """
        Return message with all sensitive fields cleared.
        
        Nested messages are redacted recursively. The input is never
        modified: a new instance is returned, or the input itself when the
        plan is a no-op.
        
        Args:
            message: Instance of message_type, or None
            
        Returns:
            Redacted instance, or None for None input
            
        Raises:
            ExecutionInconsistencyError: The instance does not match the plan
                or the builder rejected a read/write/build
        """
        if message is None:
            return None
        if self.is_noop:
            return message
        
        if type(message) is not self.message_type:
            raise self._inconsistent(
                ExecutionInconsistencyError(
                    "Message type does not match redaction plan",
                    message_type=self.message_type,
                    instance_type=type(message),
                )
            )
        
        current = None
        try:
            builder = builder_from(message)
            for current in self.sensitive_fields:
                builder.set(current, current.absent_value())
            for nested in self.nested_fields:
                current = nested.field
                builder.set(current, nested.plan.redact(builder.get(current)))
            current = None
            redacted = builder.build()
        except RedactionError:
            raise
        except Exception as exc:
            raise self._inconsistent(
                ExecutionInconsistencyError(
                    f"Failed to apply redaction plan: {exc}",
                    message_type=self.message_type,
                    field_name=current.name if current is not None else None,
                    instance_type=type(message),
                )
            ) from exc
        
        if self.record_metrics:
            redactions_total.labels(message_type=self.message_type.__qualname__).inc()
        return redacted
    
    def _inconsistent(self, error: ExecutionInconsistencyError) -> ExecutionInconsistencyError:
        logger.error("Redaction plan execution failed", error=error.message, **error.details)
        if self.record_metrics:
            redaction_errors_total.labels(error_type=type(error).__name__).inc()
        return error


NOOP_PLAN = RedactionPlan(message_type=None)
"""Shared plan for every type with nothing to redact; compare by identity."""


def build_plan(
    message_type: type[BaseModel],
    resolve_child: Callable[[type[BaseModel]], RedactionPlan],
    record_metrics: bool = False,
) -> RedactionPlan:
    """
    Classify a message type's fields into a redaction plan.
    
    Sensitive fields are cleared outright, even when message-typed. Other
    message fields are kept only if their type's plan does something.
    Scalars pass through untouched.
    
    Args:
        message_type: Frozen pydantic model class
        resolve_child: Returns the (cached) plan for a nested message type
        record_metrics: Passed to the resulting plan
        
    Returns:
        A new plan, or NOOP_PLAN if the type needs no redaction
        
    Raises:
        ConfigurationError: The type's schema cannot be planned against
    """
    sensitive: list[FieldDescriptor] = []
    nested: list[NestedField] = []
    
    for descriptor in describe_fields(message_type):
        if descriptor.redacted:
            sensitive.append(descriptor)
        elif descriptor.is_message:
            child = resolve_child(descriptor.message_type)
            if child is NOOP_PLAN:
                continue
            nested.append(NestedField(field=descriptor, plan=child))
    
    if not sensitive and not nested:
        return NOOP_PLAN
    
    return RedactionPlan(
        message_type=message_type,
        sensitive_fields=tuple(sensitive),
        nested_fields=tuple(nested),
        record_metrics=record_metrics,
    )
