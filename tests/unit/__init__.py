"""
Unit tests for the schema redactor.

Test individual components in isolation:
- Message base class (string forms, sensitive-field declarations)
- Field descriptors and builder
- Plan construction and execution
- Plan registry (caching, cycles, concurrency, metrics)
- Settings and logging configuration
"""
