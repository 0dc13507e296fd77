"""Infrastructure layer for uploads app.

This package contains integrations with external systems:
- Object store client (S3-compatible, via django-storages/boto3)
- Object key and public URL naming rules

Keep infrastructure concerns separate from business logic.
"""
