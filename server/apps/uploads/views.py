"""HTTP handlers for uploads app.

Views only translate between HTTP and the logic layer. Storage errors
raised by the logic layer become error responses here.
"""

import logging
from http import HTTPStatus
from typing import Final
from uuid import UUID

from django.apps import apps
from django.core.exceptions import ValidationError
from django.core.files.uploadedfile import UploadedFile
from django.http import HttpRequest, HttpResponse, HttpResponseBadRequest
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_GET, require_POST

from server.apps.uploads.exceptions import (
    InvalidUploadRequest,
    StorageOperationFailed,
    StorageUnavailable,
)
from server.apps.uploads.infrastructure.naming import clean_display_name
from server.apps.uploads.infrastructure.object_store import ObjectStoreClient
from server.apps.uploads.logic.record_operations import (
    delete_file_record,
    list_file_records,
    upload_file,
)
from server.apps.uploads.models import FileRecord

UPLOAD_FIELD: Final = 'upload'

logger = logging.getLogger(__name__)


def _get_object_store() -> ObjectStoreClient | None:
    """Get the object store client built at startup.

    Returns:
        Client, or None if storage is not configured.
    """
    return apps.get_app_config('uploads').object_store


def _get_uploaded_file(request: HttpRequest) -> UploadedFile:
    """Extract the uploaded file part from a multipart request.

    Args:
        request: Incoming request.

    Returns:
        Uploaded file.

    Raises:
        InvalidUploadRequest: If the request has no upload part.
    """
    uploaded = request.FILES.get(UPLOAD_FIELD)
    if uploaded is None:
        raise InvalidUploadRequest(UPLOAD_FIELD)
    return uploaded


def _storage_error_response(error: Exception) -> HttpResponse:
    """Map a storage error to an HTTP response.

    Args:
        error: StorageUnavailable or StorageOperationFailed.

    Returns:
        503 for missing configuration, 502 for a failed store call.
    """
    if isinstance(error, StorageUnavailable):
        status = HTTPStatus.SERVICE_UNAVAILABLE
    else:
        status = HTTPStatus.BAD_GATEWAY
    return HttpResponse(str(error), status=status, content_type='text/plain')


@require_GET
def index(request: HttpRequest) -> HttpResponse:
    """List all uploaded files with the upload form."""
    return render(
        request,
        'uploads/index.html',
        {'uploads': list_file_records()},
    )


@require_POST
def upload(request: HttpRequest) -> HttpResponse:
    """Accept a multipart upload and store it.

    Returns:
        Redirect to the listing on success, an error response otherwise.
    """
    try:
        uploaded = _get_uploaded_file(request)
    except InvalidUploadRequest as error:
        logger.warning('Rejected upload request: %s', error)
        return HttpResponseBadRequest('File upload error')

    try:
        upload_file(
            clean_display_name(uploaded.name or ''),
            uploaded,
            _get_object_store(),
        )
    except ValidationError as error:
        return HttpResponseBadRequest('; '.join(error.messages))
    except (StorageUnavailable, StorageOperationFailed) as error:
        return _storage_error_response(error)

    return redirect('uploads:index')


@require_POST
def delete(request: HttpRequest, record_id: UUID) -> HttpResponse:
    """Delete a file record and its stored object.

    Returns:
        Redirect to the listing on success, an error response otherwise.
    """
    record = get_object_or_404(FileRecord, id=record_id)

    try:
        delete_file_record(record, _get_object_store())
    except (StorageUnavailable, StorageOperationFailed) as error:
        return _storage_error_response(error)

    return redirect('uploads:index')
