"""Message types shared across tests.

Mirrors a small schema: Redacted has one sensitive field, NotRedacted has
none, RedactedChild nests both.
"""

from functools import cached_property
from typing import Annotated, ClassVar, Optional

from pydantic import BaseModel, ConfigDict, computed_field

from schema_redactor import messages
from schema_redactor.messages import Message, RedactedField


class Redacted(Message):
    a: Optional[str] = RedactedField()
    b: Optional[str] = None
    c: Optional[str] = None


class NotRedacted(Message):
    a: Optional[str] = None
    b: Optional[str] = None


class RedactedChild(Message):
    a: Optional[str] = None
    b: Optional[Redacted] = None
    c: Optional[NotRedacted] = None


class RedactedGrandchild(Message):
    """Two levels deep, required nested field."""
    
    name: str
    child: RedactedChild


class MarkerRedacted(Message):
    """Sensitive field declared through Annotated metadata."""
    
    user: str
    token: Annotated[Optional[str], messages.Redacted] = None


class DefaultedSecret(Message):
    """Sensitive field cleared to a non-None default."""
    
    label: str = "account"
    pin: str = RedactedField(default="****")
    attempts: int = RedactedField(default=0)


class SensitiveMessageField(Message):
    """Sensitive field whose value is itself a message."""
    
    id: int
    secret: Optional[Redacted] = RedactedField()
    public: Optional[Redacted] = None


class CollectionFields(Message):
    """Collections are not descended into."""
    
    items: list[Redacted] = []
    by_key: dict[str, Redacted] = {}
    either: Optional[Redacted | NotRedacted] = None


class WithDerived(Message):
    """Computed fields and class variables are not instance data."""
    
    VERSION: ClassVar[str] = "1"
    
    password: Optional[str] = RedactedField()
    user: str = "u"
    
    @computed_field
    @property
    def display(self) -> str:
        return f"user:{self.user}"


class SelfReferencing(Message):
    value: Optional[str] = None
    next: Optional["SelfReferencing"] = None


class CycleA(Message):
    b: Optional["CycleB"] = None


class CycleB(Message):
    a: Optional[CycleA] = None


CycleA.model_rebuild()
CycleB.model_rebuild()


class MutableModel(BaseModel):
    secret: Optional[str] = RedactedField()


class RequiredSecret(Message):
    secret: str = RedactedField(default=...)


class HoldsMutable(Message):
    inner: Optional[MutableModel] = None


class UnfrozenMessage(Message):
    model_config = ConfigDict(frozen=False)
    
    value: Optional[str] = None


class Login(Message):
    """Cached derived value computed from a sensitive field."""
    
    user: str
    password: Optional[str] = RedactedField()
    
    @computed_field
    @cached_property
    def password_hint(self) -> Optional[str]:
        return self.password[:2] if self.password else None


class Tagged(Message):
    """Mutable containers inside a frozen message."""
    
    tags: list[str] = []
    labels: dict[str, list[str]] = {}
    secret: Optional[str] = RedactedField()


class FactorySecrets(Message):
    user: str = "u"
    recovery_codes: list[str] = RedactedField(default_factory=list)


class DataFactorySecret(Message):
    user: str = "u"
    secret: Optional[str] = RedactedField(default_factory=lambda data: data["user"])
