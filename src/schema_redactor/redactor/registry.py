"""
Plan registry: memoized message type -> RedactionPlan lookup.

Plans are pure functions of type metadata, so a registry builds each type's
plan once and serves it for the registry's lifetime. Construction is
serialized under a re-entrant lock (nested plans are built while the parent's
construction holds it); cache hits do not take the lock.
"""

import threading
from typing import Optional, TypeVar

import structlog
from pydantic import BaseModel

from schema_redactor.config import Settings, settings as default_settings
from schema_redactor.exceptions import ConfigurationError, CyclicSchemaError
from schema_redactor.monitoring.metrics import redaction_errors_total, redaction_plans_built_total
from schema_redactor.redactor.plan import NOOP_PLAN, RedactionPlan, build_plan

logger = structlog.get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


class PlanRegistry:
    """
    Cache of redaction plans keyed by message type.
    
    Usage:
        registry = PlanRegistry()
        plan = registry.get(Account)
        safe = plan.redact(account)
    
    Thread Safety:
        get() may be called concurrently; each type's plan is built exactly
        once. Plans themselves are immutable and shared without locking.
    
    Attributes:
        settings: Application settings (PROMETHEUS_ENABLED)
    """
    
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings
        self._plans: dict[type, RedactionPlan] = {}
        self._building: list[type] = []
        self._lock = threading.RLock()
    
    def get(self, message_type: type[M]) -> RedactionPlan:
        """
        Return the plan for message_type, building it on first request.
        
        Building a plan builds the plans of every nested message type
        reachable through its fields.
        
        Raises:
            ConfigurationError: The type (or a nested type) cannot be planned
            CyclicSchemaError: The type graph contains a cycle
        """
        plan = self._plans.get(message_type)
        if plan is not None:
            return plan
        
        with self._lock:
            plan = self._plans.get(message_type)
            if plan is not None:
                return plan
            
            if message_type in self._building:
                start = self._building.index(message_type)
                raise CyclicSchemaError(message_type, self._building[start:])
            
            self._building.append(message_type)
            try:
                plan = build_plan(
                    message_type,
                    resolve_child=self.get,
                    record_metrics=self.settings.PROMETHEUS_ENABLED,
                )
            except ConfigurationError as e:
                # Report once, at the outermost type being built
                if len(self._building) == 1:
                    logger.error("Redaction plan construction failed", error=e.message, **e.details)
                    if self.settings.PROMETHEUS_ENABLED:
                        redaction_errors_total.labels(error_type=type(e).__name__).inc()
                raise
            finally:
                self._building.pop()
            
            self._plans[message_type] = plan
        
        noop = plan is NOOP_PLAN
        if self.settings.PROMETHEUS_ENABLED:
            redaction_plans_built_total.labels(noop=str(noop).lower()).inc()
        logger.debug(
            "Redaction plan built",
            message_type=message_type.__qualname__,
            noop=noop,
            sensitive_count=len(plan.sensitive_fields),
            nested_count=len(plan.nested_fields),
        )
        return plan
    
    def redact(self, message: Optional[M]) -> Optional[M]:
        """Redact message with the plan for its own type (None passes through)."""
        if message is None:
            return None
        return self.get(type(message)).redact(message)
    
    def clear(self) -> None:
        """Drop every cached plan."""
        with self._lock:
            self._plans.clear()
    
    def __contains__(self, message_type: object) -> bool:
        return message_type in self._plans
    
    def __len__(self) -> int:
        return len(self._plans)


default_registry = PlanRegistry()
"""Process-wide registry used by get_plan() and redact()."""


def get_plan(message_type: type[M]) -> RedactionPlan:
    """Return the process-wide cached plan for message_type."""
    return default_registry.get(message_type)


def redact(message: Optional[M]) -> Optional[M]:
    """Redact message using the process-wide registry."""
    return default_registry.redact(message)
