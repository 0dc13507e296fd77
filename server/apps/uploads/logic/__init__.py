"""Business logic layer for uploads app.

Lifecycle of a file record: metadata row plus remote object, created
and deleted together in a fixed order.

All business logic should be implemented here, separate from
models (data layer) and infrastructure (external systems).
"""
