"""Object store client for S3-compatible storage."""

import logging
from dataclasses import dataclass
from io import BytesIO
from typing import IO, Final, final

from boto3.exceptions import Boto3Error
from botocore.exceptions import BotoCoreError, ClientError
from django.conf import settings
from storages.backends.s3 import S3Storage

from server.apps.uploads.exceptions import StorageOperationFailed

logger = logging.getLogger(__name__)

PUBLIC_READ: Final = 'public-read'

# Regions where create_bucket must not send a LocationConstraint
_DEFAULT_REGIONS: Final = frozenset(('', 'us-east-1', 'auto'))

_STORE_ERRORS: Final = (Boto3Error, BotoCoreError, ClientError)


@dataclass(frozen=True)
class StorageSettings:
    """Object store settings, loaded once at startup."""

    access_key: str = ''
    secret_key: str = ''
    bucket_name: str = ''
    endpoint_url: str | None = None
    region_name: str | None = None

    @property
    def is_active(self) -> bool:
        """Whether all required settings are present.

        Returns:
            True only if access key, secret key and bucket are all set.
        """
        return bool(self.access_key and self.secret_key and self.bucket_name)

    @classmethod
    def from_django_settings(cls) -> 'StorageSettings':
        """Read storage settings from django settings.

        Returns:
            StorageSettings instance, possibly inactive.
        """
        return cls(
            access_key=getattr(settings, 'AWS_ACCESS_KEY_ID', '') or '',
            secret_key=getattr(settings, 'AWS_SECRET_ACCESS_KEY', '') or '',
            bucket_name=getattr(settings, 'AWS_STORAGE_BUCKET_NAME', '') or '',
            endpoint_url=getattr(settings, 'AWS_S3_ENDPOINT_URL', None) or None,
            region_name=getattr(settings, 'AWS_S3_REGION_NAME', None) or None,
        )


@final
class ObjectStoreClient(S3Storage):
    """Thin pass-through to the object store.

    Extends django-storages S3Storage for credentials, endpoint and
    region handling, and adds explicit bucket/key operations:
    - every call is logged
    - botocore/boto3 errors are wrapped in StorageOperationFailed
    - nothing is retried
    """

    @classmethod
    def from_settings(
        cls,
        storage_settings: StorageSettings,
    ) -> 'ObjectStoreClient':
        """Build a client for the given settings.

        Args:
            storage_settings: Active storage settings.

        Returns:
            Configured client. No network call is made.
        """
        return cls(
            access_key=storage_settings.access_key,
            secret_key=storage_settings.secret_key,
            bucket_name=storage_settings.bucket_name,
            endpoint_url=storage_settings.endpoint_url,
            region_name=storage_settings.region_name,
            default_acl=PUBLIC_READ,
            file_overwrite=True,
        )

    def put_object(  # noqa: WPS211
        self,
        bucket: str,
        key: str,
        content: bytes | IO[bytes],
        visibility: str = PUBLIC_READ,
        content_type: str | None = None,
    ) -> None:
        """Upload content to bucket/key.

        Args:
            bucket: Target bucket.
            key: Target object key.
            content: Raw bytes or a readable binary file.
            visibility: Canned ACL for the object.
            content_type: Optional Content-Type header.

        Raises:
            StorageOperationFailed: If the upload fails.
        """
        if isinstance(content, bytes):
            content = BytesIO(content)
        content.seek(0)

        extra_args = {'ACL': visibility}
        if content_type:
            extra_args['ContentType'] = content_type

        try:
            logger.info('Uploading object: %s/%s', bucket, key)
            self.connection.Object(bucket, key).upload_fileobj(
                content,
                ExtraArgs=extra_args,
            )
        except _STORE_ERRORS as error:
            logger.exception('Failed to upload object: %s/%s', bucket, key)
            raise StorageOperationFailed('put_object', bucket, key) from error
        logger.info('Successfully uploaded object: %s/%s', bucket, key)

    def delete_object(self, bucket: str, key: str) -> None:
        """Delete bucket/key.

        Args:
            bucket: Bucket holding the object.
            key: Object key.

        Raises:
            StorageOperationFailed: If the delete fails.
        """
        try:
            logger.info('Deleting object: %s/%s', bucket, key)
            self.connection.Object(bucket, key).delete()
        except _STORE_ERRORS as error:
            logger.exception('Failed to delete object: %s/%s', bucket, key)
            raise StorageOperationFailed('delete_object', bucket, key) from error
        logger.info('Successfully deleted object: %s/%s', bucket, key)

    def bucket_exists(self, bucket: str) -> bool:
        """Check whether a bucket exists.

        Args:
            bucket: Bucket name.

        Returns:
            True if the bucket exists, False if the store reports 404.

        Raises:
            StorageOperationFailed: For any other store error.
        """
        try:
            self.connection.meta.client.head_bucket(Bucket=bucket)
        except ClientError as error:
            if error.response['Error']['Code'] in {'404', 'NoSuchBucket'}:
                return False
            logger.exception('Failed to check bucket: %s', bucket)
            raise StorageOperationFailed('head_bucket', bucket) from error
        except _STORE_ERRORS as error:
            logger.exception('Failed to check bucket: %s', bucket)
            raise StorageOperationFailed('head_bucket', bucket) from error
        return True

    def create_bucket(self, bucket: str) -> None:
        """Create a bucket in the configured region.

        Args:
            bucket: Bucket name.

        Raises:
            StorageOperationFailed: If creation fails.
        """
        params: dict[str, object] = {'Bucket': bucket}
        region = self.region_name or ''
        if region not in _DEFAULT_REGIONS:
            params['CreateBucketConfiguration'] = {
                'LocationConstraint': region,
            }

        try:
            logger.info('Creating bucket: %s', bucket)
            self.connection.create_bucket(**params)
        except _STORE_ERRORS as error:
            logger.exception('Failed to create bucket: %s', bucket)
            raise StorageOperationFailed('create_bucket', bucket) from error
        logger.info('Successfully created bucket: %s', bucket)

    def delete_bucket(self, bucket: str) -> None:
        """Delete an empty bucket.

        Args:
            bucket: Bucket name.

        Raises:
            StorageOperationFailed: If deletion fails.
        """
        try:
            logger.info('Deleting bucket: %s', bucket)
            self.connection.Bucket(bucket).delete()
        except _STORE_ERRORS as error:
            logger.exception('Failed to delete bucket: %s', bucket)
            raise StorageOperationFailed('delete_bucket', bucket) from error
        logger.info('Successfully deleted bucket: %s', bucket)


def build_object_store(
    storage_settings: StorageSettings,
) -> ObjectStoreClient | None:
    """Build the object store client if storage is fully configured.

    Args:
        storage_settings: Settings loaded at startup.

    Returns:
        ObjectStoreClient, or None when any required setting is missing.
    """
    if not storage_settings.is_active:
        logger.warning(
            'Object store is not configured, uploads will be rejected',
        )
        return None

    logger.info('Using object store bucket: %s', storage_settings.bucket_name)
    return ObjectStoreClient.from_settings(storage_settings)
