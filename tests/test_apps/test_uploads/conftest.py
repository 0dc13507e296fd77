"""Shared fixtures for uploads app tests."""

import boto3
import pytest
from django.apps import apps
from django.core.files.base import ContentFile
from moto import mock_aws

from server.apps.uploads.infrastructure.object_store import (
    ObjectStoreClient,
    StorageSettings,
)

TEST_BUCKET = 'uploads'


@pytest.fixture
def storage_settings():
    """Active storage settings for the mocked store.

    Returns:
        StorageSettings pointing at the uploads bucket.
    """
    return StorageSettings(
        access_key='testing',
        secret_key='testing',
        bucket_name=TEST_BUCKET,
        region_name='us-east-1',
    )


@pytest.fixture
def mock_s3():
    """Mock S3 service with uploads bucket.

    Yields:
        boto3 S3 resource with uploads bucket created.
    """
    with mock_aws():
        # Create S3 resource
        conn = boto3.resource('s3', region_name='us-east-1')

        # Create bucket
        conn.create_bucket(Bucket=TEST_BUCKET)

        yield conn


@pytest.fixture
def object_store(mock_s3, storage_settings):
    """Object store client talking to the mocked S3.

    Returns:
        ObjectStoreClient for the uploads bucket.
    """
    return ObjectStoreClient.from_settings(storage_settings)


@pytest.fixture
def missing_bucket_store(mock_s3, storage_settings):
    """Client configured for a bucket that does not exist.

    Every object call made with it fails in the store.

    Returns:
        ObjectStoreClient for a missing bucket.
    """
    return ObjectStoreClient.from_settings(
        StorageSettings(
            access_key=storage_settings.access_key,
            secret_key=storage_settings.secret_key,
            bucket_name='missing-bucket',
            region_name=storage_settings.region_name,
        ),
    )


@pytest.fixture
def use_object_store(monkeypatch):
    """Replace the app's object store for the duration of a test.

    Returns:
        Function installing the given client (or None).
    """
    def install(store):  # noqa: WPS430
        monkeypatch.setattr(
            apps.get_app_config('uploads'),
            'object_store',
            store,
        )
        return store

    return install


@pytest.fixture
def installed_store(object_store, use_object_store):
    """Install the mocked client as the app's object store.

    Returns:
        The installed ObjectStoreClient.
    """
    return use_object_store(object_store)


@pytest.fixture
def no_store(use_object_store):
    """Run the app as if storage was never configured."""
    use_object_store(None)


@pytest.fixture
def sample_file_content():
    """Sample file content for testing.

    Returns:
        ContentFile with test data.
    """
    return ContentFile(b'%PDF-1.4 test report', name='report.pdf')