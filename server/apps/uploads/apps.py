"""Django app configuration for uploads app."""

import logging
from typing_extensions import override

from django.apps import AppConfig

from server.apps.uploads.infrastructure.naming import (
    get_object_url_base,
    is_valid_url_base,
)
from server.apps.uploads.infrastructure.object_store import (
    ObjectStoreClient,
    StorageSettings,
    build_object_store,
)

logger = logging.getLogger(__name__)


class UploadsConfig(AppConfig):
    """Configuration for uploads app.

    Builds the object store client once per process. Views hand it to
    the logic layer explicitly.
    """

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'server.apps.uploads'
    verbose_name = 'Uploads'

    object_store: ObjectStoreClient | None = None

    @override
    def ready(self) -> None:
        """Build the object store client and check the public address."""
        self.object_store = build_object_store(
            StorageSettings.from_django_settings(),
        )

        base_url = get_object_url_base()
        if not is_valid_url_base(base_url):
            logger.warning(
                'UPLOADS_OBJECT_URL_BASE is not an http(s) address: %r, '
                'uploads will be rejected',
                base_url,
            )
