"""
Field metadata and builder capability for message types.

The redaction engine never touches pydantic internals directly: it plans
against the descriptor table returned by describe_fields() and mutates
through a Builder. Both are derived from the declarative model schema only.
"""

import copy
import types
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar, Union, get_args, get_origin

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from schema_redactor.exceptions import ConfigurationError
from schema_redactor.messages.base import is_redacted

M = TypeVar("M", bound=BaseModel)


class FieldKind(str, Enum):
    """Declared value kind of a message field."""
    
    SCALAR = "scalar"
    MESSAGE = "message"


@dataclass(frozen=True)
class FieldDescriptor:
    """
    Static description of one declared field of a message type.
    
    Attributes:
        name: Field name on the model
        kind: SCALAR, or MESSAGE for a single nested message (optional or not)
        redacted: Whether the schema marks the field as sensitive
        required: Whether the field has no default
        message_type: Nested model class when kind is MESSAGE
    """
    
    name: str
    kind: FieldKind
    redacted: bool = False
    required: bool = False
    message_type: type[BaseModel] | None = None
    field_info: FieldInfo | None = field(default=None, compare=False, repr=False)
    
    @property
    def is_message(self) -> bool:
        return self.kind is FieldKind.MESSAGE
    
    def absent_value(self) -> Any:
        """Value a cleared field is set to: its default, None when undeclared."""
        if self.field_info is None:
            return None
        return self.field_info.get_default(call_default_factory=True)


def _nested_message_type(annotation: Any) -> type[BaseModel] | None:
    # Optional[Msg] / Msg | None count as a single message; collections do not
    if get_origin(annotation) in (Union, types.UnionType):
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) != 1:
            return None
        annotation = members[0]
    if get_origin(annotation) is not None or not isinstance(annotation, type):
        return None
    if issubclass(annotation, BaseModel):
        return annotation
    return None


def describe_fields(message_type: type) -> tuple[FieldDescriptor, ...]:
    """
    Build the field descriptor table for a message type.
    
    Only declared instance fields are described; computed fields and class
    variables are not instance data.
    
    Args:
        message_type: Frozen pydantic model class
        
    Returns:
        Descriptors in declaration order
        
    Raises:
        ConfigurationError: The type cannot be planned against (not a
            pydantic model, not frozen, unresolved forward references, or a
            sensitive field with no default to clear it to)
    """
    if not (isinstance(message_type, type) and issubclass(message_type, BaseModel)):
        raise ConfigurationError(
            "Message type must be a pydantic model class", message_type=message_type
        )
    if not message_type.model_config.get("frozen", False):
        raise ConfigurationError(
            "Message type must be frozen (model_config frozen=True)",
            message_type=message_type,
        )
    if not message_type.__pydantic_complete__:
        raise ConfigurationError(
            "Message type has unresolved forward references, call model_rebuild() first",
            message_type=message_type,
        )
    
    descriptors = []
    for name, field_info in message_type.model_fields.items():
        redacted = is_redacted(field_info)
        required = field_info.is_required()
        if redacted and required:
            raise ConfigurationError(
                f"Sensitive field '{name}' is required and cannot be cleared",
                message_type=message_type,
                field_name=name,
            )
        if redacted and field_info.default_factory_takes_validated_data:
            raise ConfigurationError(
                f"Sensitive field '{name}' has a default factory that needs validated data"
                " and cannot be cleared on its own",
                message_type=message_type,
                field_name=name,
            )
        nested = _nested_message_type(field_info.annotation)
        descriptors.append(
            FieldDescriptor(
                name=name,
                kind=FieldKind.MESSAGE if nested is not None else FieldKind.SCALAR,
                redacted=redacted,
                required=required,
                message_type=nested,
                field_info=field_info,
            )
        )
    return tuple(descriptors)


class Builder(Generic[M]):
    """
    Mutable staging copy of one immutable message.
    
    Seeded with every field value of the source message; set() records
    overrides and build() finalizes them into a new frozen instance. The
    source message is never modified.
    
    Usage:
        redacted = builder_from(account).set("password", None).build()
    """
    
    def __init__(self, message: M):
        self._message = message
        self._overrides: dict[str, Any] = {}
    
    @property
    def message_type(self) -> type[M]:
        return type(self._message)
    
    def _field_name(self, field_ref: FieldDescriptor | str) -> str:
        name = field_ref.name if isinstance(field_ref, FieldDescriptor) else field_ref
        if name not in self.message_type.model_fields:
            raise KeyError(f"{self.message_type.__qualname__} has no field '{name}'")
        return name
    
    def get(self, field_ref: FieldDescriptor | str) -> Any:
        name = self._field_name(field_ref)
        if name in self._overrides:
            return self._overrides[name]
        return getattr(self._message, name)
    
    def set(self, field_ref: FieldDescriptor | str, value: Any) -> "Builder[M]":
        self._overrides[self._field_name(field_ref)] = value
        return self
    
    def build(self) -> M:
        """
        Finalize into a new immutable instance (the source if nothing was set).
        
        The result is built from declared field values only, so state cached
        on the source (cached properties) is not carried over. Values that
        were not overridden are deep-copied; frozen nested messages are
        shared.
        """
        if not self._overrides:
            return self._message
        
        values = {}
        for name in self.message_type.model_fields:
            if name in self._overrides:
                values[name] = self._overrides[name]
            else:
                values[name] = _owned_copy(getattr(self._message, name))
        
        return self.message_type.model_construct(
            _fields_set=self._message.model_fields_set | set(self._overrides),
            **values,
        )


def _owned_copy(value: Any) -> Any:
    if isinstance(value, BaseModel) and value.model_config.get("frozen", False):
        return value
    return copy.deepcopy(value)


def builder_from(message: M) -> Builder[M]:
    """Return a builder pre-populated with every field value of message."""
    if not isinstance(message, BaseModel):
        raise TypeError(f"Expected a pydantic message, got {type(message).__qualname__}")
    return Builder(message)
