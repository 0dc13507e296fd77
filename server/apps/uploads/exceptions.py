"""Exceptions for uploads app."""


class StorageUnavailable(Exception):  # noqa: N818
    """Raised when the object store client was never activated.

    The client is only built when access key, secret key and bucket
    name are all configured. Nothing is attempted when it is missing.
    """

    def __init__(self, operation: str) -> None:
        """Initialize StorageUnavailable.

        Args:
            operation: Name of the operation that needed storage.
        """
        self.operation = operation
        super().__init__(
            f'Could not {operation}: object store is not configured',
        )


class StorageOperationFailed(Exception):  # noqa: N818
    """Raised when a configured object store call fails."""

    def __init__(
        self,
        operation: str,
        bucket: str,
        key: str = '',
    ) -> None:
        """Initialize StorageOperationFailed.

        Args:
            operation: Object store operation (e.g. 'put_object').
            bucket: Target bucket.
            key: Target object key, empty for bucket operations.
        """
        self.operation = operation
        self.bucket = bucket
        self.key = key

        target = f'{bucket}/{key}' if key else bucket
        super().__init__(f'Object store {operation} failed for {target}')


class InvalidUploadRequest(Exception):  # noqa: N818
    """Raised when an upload request carries no file part."""

    def __init__(self, field_name: str) -> None:
        """Initialize InvalidUploadRequest.

        Args:
            field_name: Name of the missing multipart field.
        """
        self.field_name = field_name
        super().__init__(f'File upload error: missing {field_name!r} field')
