"""
End-to-end redaction scenarios through the process-wide registry.

Exercises the public entry points (get_plan / redact) on the shared message
schema and checks the properties every redaction must satisfy.
"""

import pytest

from fixtures import (
    CollectionFields,
    MarkerRedacted,
    NotRedacted,
    Redacted,
    RedactedChild,
    RedactedGrandchild,
    SensitiveMessageField,
)
from schema_redactor.messages import builder_from
from schema_redactor.redactor import get_plan, redact


SAMPLES = [
    Redacted(a="a", b="b", c="c"),
    Redacted(b="only-b"),
    NotRedacted(a="a", b="b"),
    RedactedChild(a="a", b=Redacted(a="a", b="b", c="c"), c=NotRedacted(a="a", b="b")),
    RedactedChild(),
    RedactedGrandchild(
        name="root",
        child=RedactedChild(b=Redacted(a="deep-secret", c="c")),
    ),
    MarkerRedacted(user="alice", token="tok"),
    SensitiveMessageField(id=7, secret=Redacted(a="x"), public=Redacted(a="y", b="b")),
    CollectionFields(items=[Redacted(a="a")], either=Redacted(a="a")),
]


class TestScenarios:
    def test_redacted(self):
        message = Redacted(a="a", b="b", c="c")
        expected = builder_from(message).set("a", None).build()
        
        assert get_plan(Redacted).redact(message) == expected
        assert expected == Redacted(b="b", c="c")
    
    def test_not_redacted(self):
        message = NotRedacted(a="a", b="b")
        
        assert get_plan(NotRedacted).redact(message) == message
    
    def test_redacted_child(self):
        message = RedactedChild(
            a="a",
            b=Redacted(a="a", b="b", c="c"),
            c=NotRedacted(a="a", b="b"),
        )
        expected = builder_from(message).set(
            "b", builder_from(message.b).set("a", None).build()
        ).build()
        
        assert get_plan(RedactedChild).redact(message) == expected
        assert expected == RedactedChild(
            a="a", b=Redacted(b="b", c="c"), c=NotRedacted(a="a", b="b")
        )
    
    def test_grandchild(self):
        message = SAMPLES[5]
        
        result = redact(message)
        
        assert result.name == "root"
        assert result.child.b == Redacted(c="c")
        assert "deep-secret" not in repr(result)
    
    def test_collections_pass_through(self):
        message = SAMPLES[8]
        
        result = redact(message)
        
        assert result is message
        assert result.items[0].a == "a"


class TestProperties:
    def test_no_sensitive_fields_identity(self):
        message = NotRedacted(a="a", b="b")
        
        assert redact(message) is message
    
    @pytest.mark.parametrize("message", SAMPLES, ids=lambda m: type(m).__name__)
    def test_idempotent(self, message):
        once = redact(message)
        
        assert redact(once) == once
    
    @pytest.mark.parametrize("message", SAMPLES, ids=lambda m: type(m).__name__)
    def test_input_unchanged(self, message):
        before = message.model_dump()
        
        redact(message)
        
        assert message.model_dump() == before
    
    @pytest.mark.parametrize(
        "message", [m for m in SAMPLES if isinstance(m, RedactedChild)], ids=str
    )
    def test_commutes_with_field_access(self, message):
        result = redact(message)
        
        assert result.b == redact(message.b)
        assert result.c == redact(message.c)
    
    def test_noop_nested_is_same_reference(self):
        message = SAMPLES[3]
        
        assert redact(message).c is message.c
    
    def test_non_sensitive_fields_preserved(self):
        message = Redacted(a="a", b="b", c="c")
        
        result = redact(message)
        
        assert result.a is None
        assert (result.b, result.c) == (message.b, message.c)
    
    def test_absent(self):
        assert redact(None) is None
        assert get_plan(RedactedChild).redact(None) is None
