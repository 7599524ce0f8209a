"""
Message type system consumed by the redaction engine.

- base.py: Message base class and sensitive-field declarations
  - RedactedField(): pydantic Field marked as sensitive
  - Annotated[T, Redacted]: marker form of the same declaration
  - str()/repr() never render sensitive fields
- schema.py: capability contract the engine plans against
  - describe_fields(): per-type field descriptor table
  - builder_from(): mutable builder seeded from an immutable instance
"""

from schema_redactor.messages.base import (
    Message,
    Redacted,
    RedactedField,
    is_redacted,
    redacted_field_names,
)
from schema_redactor.messages.schema import (
    Builder,
    FieldDescriptor,
    FieldKind,
    builder_from,
    describe_fields,
)

__all__ = [
    "Message",
    "Redacted",
    "RedactedField",
    "is_redacted",
    "redacted_field_names",
    "Builder",
    "FieldDescriptor",
    "FieldKind",
    "builder_from",
    "describe_fields",
]
