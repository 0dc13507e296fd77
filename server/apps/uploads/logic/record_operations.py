"""Business logic for file record lifecycle.

A file record is a metadata row plus an object in the store. The two
are not written atomically, so the order is fixed:

- save: insert the row first (the object key needs the generated id),
  then upload. A failed upload leaves the row in place.
- delete: remove the object first, then the row. A failed object
  delete keeps the row, the only pointer to the object.

The object store client is always passed in explicitly. None means
storage is not configured and every operation fails fast.
"""

import logging
import uuid
from typing import IO

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import QuerySet

from server.apps.uploads.exceptions import StorageUnavailable
from server.apps.uploads.infrastructure.naming import (
    detect_mime_type,
    get_object_url_base,
    validate_display_name,
    validate_object_url,
)
from server.apps.uploads.infrastructure.object_store import (
    PUBLIC_READ,
    ObjectStoreClient,
)
from server.apps.uploads.models import FileRecord

logger = logging.getLogger(__name__)


def _require_store(
    store: ObjectStoreClient | None,
    operation: str,
) -> ObjectStoreClient:
    """Return the store or fail fast when storage is not configured.

    Args:
        store: Client built at startup, None if inactive.
        operation: Operation name for the error message.

    Returns:
        The active client.

    Raises:
        StorageUnavailable: If store is None.
    """
    if store is None:
        logger.error(
            'Could not %s because object store is not configured',
            operation,
        )
        raise StorageUnavailable(operation)
    return store


def persist_metadata(record: FileRecord) -> FileRecord:
    """Insert the metadata row, generating the record id.

    The id is generated here and only kept if the insert succeeds.

    Args:
        record: Draft record with display_name and bucket_name set.

    Returns:
        The same record, now persisted.

    Raises:
        ValidationError: If the record already has an id.
        Exception: If the DB insert fails.
    """
    if not record.is_draft:
        raise ValidationError('File record has already been saved')

    record.id = uuid.uuid4()
    try:
        with transaction.atomic():
            record.save(force_insert=True)
    except Exception:
        logger.exception(
            'Failed to insert file record: %s',
            record.display_name,
        )
        record.id = None
        raise

    logger.info(
        'File record created in database: %s (ID: %s)',
        record.display_name,
        record.id,
    )
    return record


def upload_object(record: FileRecord, store: ObjectStoreClient) -> None:
    """Upload the record's local content to its derived key.

    Args:
        record: Persisted record with local_content set.
        store: Active object store client.

    Raises:
        StorageOperationFailed: If the upload fails.
    """
    content = record.local_content
    if content is None:
        raise ValidationError('File record has no content to upload')

    store.put_object(
        record.bucket_name,
        record.object_key,
        content,
        visibility=PUBLIC_READ,
        content_type=detect_mime_type(record.display_name),
    )
    # Content is only kept until it reaches the store
    record.local_content = None


def save_file_record(
    record: FileRecord,
    store: ObjectStoreClient | None,
) -> FileRecord:
    """Save a draft record: metadata row first, then the object.

    No rollback: if the upload fails the row stays and the error is
    raised. Such orphans are left for an operator to reconcile.

    Args:
        record: Draft record with display_name and local_content set.
        store: Object store client, None if storage is not configured.

    Returns:
        The persisted record.

    Raises:
        StorageUnavailable: If storage is not configured (no row created).
        ValidationError: If the record is not a valid draft.
        StorageOperationFailed: If the upload fails (row kept).
    """
    active_store = _require_store(store, 'save')

    # A saved record keeps the bucket it was stamped with
    if not record.is_draft:
        raise ValidationError('File record has already been saved')
    if record.local_content is None:
        raise ValidationError('File record has no content to upload')
    validate_display_name(record.display_name)
    validate_object_url(
        get_object_url_base(),
        active_store.bucket_name,
        record.display_name,
    )

    record.bucket_name = active_store.bucket_name
    persist_metadata(record)

    try:
        upload_object(record, active_store)
    except Exception:
        logger.exception(
            'Upload failed, file record kept without object (orphaned): %s',
            record.id,
        )
        raise

    logger.info(
        'File saved: %s/%s',
        record.bucket_name,
        record.object_key,
    )
    return record


def upload_file(
    display_name: str,
    content: IO[bytes] | bytes,
    store: ObjectStoreClient | None,
) -> FileRecord:
    """Create and save a file record from uploaded content.

    Args:
        display_name: Original filename.
        content: Uploaded file or raw bytes.
        store: Object store client, None if storage is not configured.

    Returns:
        The persisted record.
    """
    record = FileRecord(display_name=display_name)
    record.local_content = content
    return save_file_record(record, store)


def delete_file_record(
    record: FileRecord,
    store: ObjectStoreClient | None,
) -> None:
    """Delete the object first, then the metadata row.

    Args:
        record: Persisted record.
        store: Object store client, None if storage is not configured.

    Raises:
        StorageUnavailable: If storage is not configured (row kept).
        ValidationError: If the record was never saved.
        StorageOperationFailed: If the object delete fails (row kept).
    """
    active_store = _require_store(store, 'delete')

    if record.is_draft:
        raise ValidationError(
            'Cannot delete a file record that was never saved',
        )

    record_id = record.id
    active_store.delete_object(record.bucket_name, record.object_key)

    try:
        with transaction.atomic():
            record.delete()
    except Exception:
        logger.exception(
            'Object deleted but file record remains: ID=%s',
            record_id,
        )
        raise

    logger.info('File record deleted: ID=%s', record_id)


def list_file_records() -> QuerySet[FileRecord]:
    """List all file records.

    Returns:
        QuerySet of every record, in no particular order.
    """
    return FileRecord.objects.all()


def get_file_record(record_id: uuid.UUID) -> FileRecord:
    """Get a file record by id.

    Args:
        record_id: Record id.

    Returns:
        FileRecord instance.

    Raises:
        FileRecord.DoesNotExist: If no record has this id.
    """
    return FileRecord.objects.get(id=record_id)
