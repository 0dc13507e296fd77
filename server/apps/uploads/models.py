"""Database models for uploads app."""

from typing import IO, Final, final

from typing_extensions import override

from django.db import models

from server.apps.uploads.infrastructure.naming import (
    DISPLAY_NAME_MAX_LENGTH,
    build_object_key,
    build_object_url,
    get_object_url_base,
)

_BUCKET_NAME_MAX_LENGTH: Final = 63  # S3 bucket name limit


@final
class FileRecord(models.Model):
    """Metadata of one uploaded file.

    The file itself lives in the object store under the key
    '{id}/{display_name}' inside 'bucket_name'. Rows are created and
    deleted only through server.apps.uploads.logic.record_operations,
    which keeps the row and the object in step.

    The id has no default: it is None while the record is a draft and
    is generated when the row is first inserted.
    """

    id = models.UUIDField(  # noqa: A003
        primary_key=True,
        editable=False,
    )

    display_name = models.CharField(
        max_length=DISPLAY_NAME_MAX_LENGTH,
        help_text='Original filename as uploaded',
    )

    # Stamped from the store configuration at save time
    bucket_name = models.CharField(
        max_length=_BUCKET_NAME_MAX_LENGTH,
        editable=False,
    )

    uploaded_at = models.DateTimeField(auto_now_add=True)

    # Raw content of a draft, never persisted
    local_content: IO[bytes] | bytes | None = None

    class Meta:
        """Model metadata."""

        verbose_name = 'File record'  # type: ignore[mutable-override]
        verbose_name_plural = 'File records'  # type: ignore[mutable-override]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.bucket_name}:{self.display_name}'

    @property
    def is_draft(self) -> bool:
        """Whether the record has not been inserted yet.

        Returns:
            True if no id has been generated.
        """
        return self.id is None

    @property
    def object_key(self) -> str:
        """Object key derived from id and display name.

        Example: '3f2a.../report.pdf'

        Returns:
            Key of the object inside bucket_name, empty for drafts.
        """
        if self.is_draft:
            return ''
        return build_object_key(self.id, self.display_name)

    def get_url(self) -> str | None:
        """Get public URL of the stored object.

        Built locally, the store is not contacted.

        Returns:
            URL, or None for drafts and unbuildable addresses.
        """
        if self.is_draft:
            return None
        return build_object_url(
            get_object_url_base(),
            self.bucket_name, self.object_key)
