"""
Shared helpers for settings, logging, connection pooling, and schema management.
These modules hold the cross-cutting concerns the API layer depends on.
"""
