"""Tests for object naming rules."""

import uuid

import pytest
from django.core.exceptions import ValidationError

from server.apps.uploads.infrastructure.naming import (
    build_object_key,
    build_object_url,
    clean_display_name,
    detect_mime_type,
    get_object_url_base,
    is_valid_url_base,
    validate_display_name,
    validate_object_url,
)

_RECORD_ID = uuid.UUID('6f1c2a1e-8a3b-4c5d-9e0f-123456789abc')


def test_detect_mime_type():
    """Test MIME type detection from display name."""
    assert detect_mime_type('report.pdf') == 'application/pdf'
    assert detect_mime_type('notes.txt') == 'text/plain'
    assert detect_mime_type('photo.jpg') == 'image/jpeg'


def test_detect_mime_type_unknown():
    """Test MIME type detection for unknown extension."""
    assert detect_mime_type('data.unknown') == 'application/octet-stream'


@pytest.mark.parametrize(('raw_name', 'expected'), [
    ('report.pdf', 'report.pdf'),
    ('docs/report.pdf', 'report.pdf'),
    ('C:\\fakepath\\report.pdf', 'report.pdf'),
    ('  spaced.txt ', 'spaced.txt'),
])
def test_clean_display_name(raw_name, expected):
    """Test client-side directories are stripped."""
    assert clean_display_name(raw_name) == expected


def test_validate_display_name_accepts_plain_name():
    """Test a plain filename is valid."""
    validate_display_name('report final.pdf')


@pytest.mark.parametrize('display_name', [
    '',
    '   ',
    'docs/report.pdf',
    'x' * 256,
])
def test_validate_display_name_rejects(display_name):
    """Test empty, path-like and too long names are rejected."""
    with pytest.raises(ValidationError):
        validate_display_name(display_name)


def test_build_object_key():
    """Test key is '{id}/{name}'."""
    key = build_object_key(_RECORD_ID, 'report.pdf')

    assert key == f'{_RECORD_ID}/report.pdf'


def test_build_object_url():
    """Test public URL layout for the shared bucket."""
    url = build_object_url(
        'https://s3.amazonaws.com',
        'uploads',
        f'{_RECORD_ID}/report.pdf',
    )

    assert url == f'https://s3.amazonaws.com/uploads/{_RECORD_ID}/report.pdf'


def test_build_object_url_quotes_key():
    """Test spaces in the name are percent-encoded."""
    url = build_object_url(
        'https://s3.amazonaws.com/',
        'uploads',
        f'{_RECORD_ID}/report final.pdf',
    )

    assert url == (
        f'https://s3.amazonaws.com/uploads/{_RECORD_ID}/report%20final.pdf'
    )


def test_build_object_url_invalid_base():
    """Test an unusable base address yields None instead of raising."""
    assert build_object_url('not a url', 'uploads', 'key.txt') is None


def test_build_object_url_missing_parts():
    """Test missing bucket or key yields None."""
    assert build_object_url('https://s3.amazonaws.com', '', 'key.txt') is None
    assert build_object_url('https://s3.amazonaws.com', 'uploads', '') is None


@pytest.mark.parametrize(('base_url', 'expected'), [
    ('https://s3.amazonaws.com', True),
    ('http://minio:9000', True),
    ('http://localhost:9000/', True),
    ('s3.amazonaws.com', False),
    ('ftp://files.example.com', False),
    ('https://', False),
    ('http://[::1', False),
])
def test_is_valid_url_base(base_url, expected):
    """Test store addresses need an http(s) scheme and a host."""
    assert is_valid_url_base(base_url) is expected


def test_build_object_url_single_label_host():
    """Test a compose service name works as store host."""
    url = build_object_url('http://minio:9000', 'uploads', 'a/report.pdf')

    assert url == 'http://minio:9000/uploads/a/report.pdf'


def test_build_object_url_too_long():
    """Test an encoded URL over the length limit yields None."""
    key = build_object_key(_RECORD_ID, '\U0001F600' * 251 + '.txt')

    assert build_object_url('https://s3.amazonaws.com', 'uploads', key) is None


def test_validate_object_url_accepts_plain_name():
    """Test an ordinary name yields a buildable URL."""
    validate_object_url('https://s3.amazonaws.com', 'uploads', 'report.pdf')


def test_validate_object_url_rejects_long_encoded_name():
    """Test a valid-length name whose encoded URL is too long."""
    display_name = '\U0001F600' * 251 + '.txt'
    validate_display_name(display_name)

    with pytest.raises(ValidationError):
        validate_object_url('https://s3.amazonaws.com', 'uploads', display_name)


def test_validate_object_url_rejects_bad_base():
    """Test an unusable store address rejects every name."""
    with pytest.raises(ValidationError):
        validate_object_url('not a url', 'uploads', 'report.pdf')


def test_get_object_url_base(settings):
    """Test the store address comes from settings."""
    settings.UPLOADS_OBJECT_URL_BASE = 'http://minio:9000'

    assert get_object_url_base() == 'http://minio:9000'
