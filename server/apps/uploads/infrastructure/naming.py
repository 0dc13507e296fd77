"""Naming rules for uploaded objects.

Object keys and public URLs are pure functions of a record's identity
fields, so they can be rebuilt at any time without touching the store.
"""

import mimetypes
from pathlib import PurePosixPath, PureWindowsPath
from typing import Final
from urllib.parse import quote, urlsplit
from uuid import UUID

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import URLValidator

DISPLAY_NAME_MAX_LENGTH: Final = 255
DEFAULT_OBJECT_URL_BASE: Final = 'https://s3.amazonaws.com'

# Every generated id has the same textual length
_PLACEHOLDER_ID: Final = UUID(int=0)

_URL_SCHEMES: Final = frozenset(('http', 'https'))


def detect_mime_type(display_name: str) -> str:
    """Guess MIME type from the display name extension.

    Args:
        display_name: Original filename (e.g., 'report.pdf').

    Returns:
        MIME type string, 'application/octet-stream' if unknown.
    """
    mime_type, _ = mimetypes.guess_type(display_name)
    if mime_type is None:
        return 'application/octet-stream'
    return mime_type


def clean_display_name(raw_name: str) -> str:
    """Strip client-side directories from an uploaded filename.

    Some browsers send 'C:\\fakepath\\report.pdf' or a relative path.

    Args:
        raw_name: Filename as sent by the client.

    Returns:
        Bare filename.
    """
    return PurePosixPath(PureWindowsPath(raw_name).name).name.strip()


def validate_display_name(display_name: str) -> None:
    """Validate a display name before it becomes part of an object key.

    Args:
        display_name: Filename to validate.

    Raises:
        ValidationError: If the name is empty, too long or has a path.
    """
    if not display_name or not display_name.strip():
        raise ValidationError('Display name cannot be empty')

    if len(display_name) > DISPLAY_NAME_MAX_LENGTH:
        raise ValidationError(
            f'Display name is longer than {DISPLAY_NAME_MAX_LENGTH} characters',
        )

    if clean_display_name(display_name) != display_name:
        raise ValidationError('Display name must not contain a path')


def build_object_key(record_id: UUID, display_name: str) -> str:
    """Build the object key inside the shared bucket.

    Example: (UUID('abc...'), 'report.pdf') -> 'abc.../report.pdf'

    Args:
        record_id: Generated record id.
        display_name: Original filename.

    Returns:
        Object key.
    """
    return f'{record_id}/{display_name}'


def is_valid_url_base(base_url: str) -> bool:
    """Check the store address has an http(s) scheme and a host.

    Single-label hosts such as 'http://minio:9000' are accepted.

    Args:
        base_url: Store address.

    Returns:
        True if object URLs can be built on top of it.
    """
    try:
        parts = urlsplit(base_url)
        hostname = parts.hostname
    except ValueError:
        return False
    return parts.scheme in _URL_SCHEMES and bool(hostname)


def build_object_url(base_url: str, bucket: str, key: str) -> str | None:
    """Build the public URL of an object.

    Does not raise: an address that fails validation yields None so
    listings can still render the record.

    Args:
        base_url: Store address (e.g., 'https://s3.amazonaws.com').
        bucket: Bucket the object lives in.
        key: Object key.

    Returns:
        Public URL, or None if no valid URL can be built.
    """
    if not bucket or not key or not is_valid_url_base(base_url):
        return None

    url = '{base}/{bucket}/{key}'.format(
        base=base_url.rstrip('/'),
        bucket=quote(bucket),
        key=quote(key),
    )
    if len(url) > URLValidator.max_length:
        return None
    return url


def get_object_url_base() -> str:
    """Get the configured public address of the store.

    Returns:
        UPLOADS_OBJECT_URL_BASE, 'https://s3.amazonaws.com' by default.
    """
    return getattr(
        settings,
        'UPLOADS_OBJECT_URL_BASE',
        DEFAULT_OBJECT_URL_BASE,
    )


def validate_object_url(base_url: str, bucket: str, display_name: str) -> None:
    """Check that a record with this name will get a public URL.

    Percent-encoding can push a valid display name past the URL length
    limit, so the URL is built once up front with a placeholder id.

    Args:
        base_url: Store address.
        bucket: Bucket the object will be stored in.
        display_name: Validated display name.

    Raises:
        ValidationError: If no valid URL can be built.
    """
    key = build_object_key(_PLACEHOLDER_ID, display_name)
    if build_object_url(base_url, bucket, key) is None:
        raise ValidationError(
            'Display name cannot be part of a valid public URL',
        )
