"""
Message base class and sensitive-field declarations.

Message types are frozen pydantic models. A field is sensitive when it is
declared with RedactedField() or annotated with the Redacted marker:

    class Account(Message):
        user_id: str
        password: Optional[str] = RedactedField()
        token: Annotated[Optional[str], Redacted] = None
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.fields import FieldInfo

REDACTED_KEY = "redacted"


class _RedactedMarker:
    """Annotated[...] metadata marking a field as sensitive."""

    def __repr__(self) -> str:
        return "Redacted"


Redacted = _RedactedMarker()


def RedactedField(default: Any = None, **kwargs: Any) -> Any:
    """
    Declare a sensitive field.
    
    Wraps pydantic.Field, flags the field in its JSON schema
    ("redacted": true) and hides it from repr. Sensitive fields need a
    default: redaction clears them back to it.
    
    Args:
        default: Value the field is cleared to (None unless given; ignored
            when default_factory is passed)
        **kwargs: Passed through to pydantic.Field
    """
    extra = kwargs.pop("json_schema_extra", None) or {}
    if not isinstance(extra, dict):
        raise TypeError("RedactedField only supports dict json_schema_extra")
    kwargs.setdefault("repr", False)
    kwargs["json_schema_extra"] = {**extra, REDACTED_KEY: True}
    if "default_factory" in kwargs:
        return Field(**kwargs)
    return Field(default, **kwargs)


def is_redacted(field_info: FieldInfo) -> bool:
    """Return True if the field is declared sensitive."""
    extra = field_info.json_schema_extra
    if isinstance(extra, dict) and extra.get(REDACTED_KEY) is True:
        return True
    return any(item is Redacted for item in field_info.metadata)


def redacted_field_names(model_type: type[BaseModel]) -> frozenset[str]:
    """Names of the sensitive fields declared on a model type."""
    return frozenset(
        name for name, field_info in model_type.model_fields.items() if is_redacted(field_info)
    )


class Message(BaseModel):
    """
    Immutable structured message.
    
    Instances are frozen; derive modified copies through
    schema_redactor.messages.builder_from().
    
    String forms never include sensitive fields:
        >>> str(Redacted(a="a", b="b", c="c"))
        'Redacted{b=b, c=c}'
    """
    
    model_config = ConfigDict(frozen=True, extra="forbid")
    
    def __str__(self) -> str:
        hidden = redacted_field_names(type(self))
        parts = []
        for name in type(self).model_fields:
            value = getattr(self, name)
            if value is None or name in hidden:
                continue
            parts.append(f"{name}={value}")
        return f"{type(self).__name__}{{{', '.join(parts)}}}"
    
    def __repr_args__(self):
        hidden = redacted_field_names(type(self))
        for name, value in super().__repr_args__():
            if name not in hidden:
                yield name, value
