"""
Redaction engine exceptions.

Every error raised here is fatal for the call that raised it: there is no
partial-redaction result. A half-redacted message could leak sensitive data,
so callers get either a fully redacted instance or an exception.
"""

from typing import Any


class RedactionError(Exception):
    """
    Base exception for all redaction engine errors.
    
    Carries structured details for logging/metrics alongside the message.
    """
    
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """
        Initialize redaction error.
        
        Args:
            message: Human-readable error description
            details: Structured error data for logging/metrics
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
    
    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(RedactionError):
    """
    Plan construction failed for a message type.
    
    Raised when a type's schema cannot be resolved into field descriptors or
    a builder:
    - the type is not a pydantic model class
    - the model is not frozen
    - a sensitive field has no default to clear it to
    - forward references are still unresolved
    
    Not retried: the message type definition must be fixed.
    """
    
    def __init__(
        self,
        message: str,
        message_type: type | None = None,
        field_name: str | None = None,
    ):
        details = {}
        if message_type is not None:
            details["message_type"] = getattr(message_type, "__qualname__", repr(message_type))
        if field_name:
            details["field_name"] = field_name
        
        super().__init__(message, details)
        self.message_type = message_type
        self.field_name = field_name


class CyclicSchemaError(ConfigurationError):
    """
    A message type re-entered its own plan construction.
    
    Raised for self-referencing or mutually-referencing message types, whose
    plans would otherwise recurse forever.
    """
    
    def __init__(self, message_type: type, path: list[type]):
        chain = " -> ".join(t.__qualname__ for t in [*path, message_type])
        super().__init__(f"Cyclic message schema: {chain}", message_type=message_type)
        self.details["path"] = chain
        self.path = path


class ExecutionInconsistencyError(RedactionError):
    """
    Applying a cached plan to an instance failed.
    
    Raised when reading/writing a field on the builder or finalizing it fails,
    or the instance's runtime type disagrees with the plan. Never interpreted
    as "field absent".
    """
    
    def __init__(
        self,
        message: str,
        message_type: type | None = None,
        field_name: str | None = None,
        instance_type: type | None = None,
    ):
        details = {}
        if message_type is not None:
            details["message_type"] = message_type.__qualname__
        if instance_type is not None:
            details["instance_type"] = instance_type.__qualname__
        if field_name:
            details["field_name"] = field_name
        
        super().__init__(message, details)
        self.message_type = message_type
        self.field_name = field_name
