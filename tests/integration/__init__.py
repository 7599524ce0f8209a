"""
Integration tests for the schema redactor.

End-to-end redaction through the process-wide registry on a shared schema.
"""
