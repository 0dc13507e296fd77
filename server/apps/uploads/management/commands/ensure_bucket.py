"""Management command to create the configured upload bucket."""

import logging
from typing import Any, final

from typing_extensions import override

from django.apps import apps
from django.core.management.base import BaseCommand, CommandError

from server.apps.uploads.exceptions import StorageOperationFailed

logger = logging.getLogger(__name__)


@final
class Command(BaseCommand):
    """Create the upload bucket if it does not exist yet."""

    help = 'Create the configured object store bucket if missing'

    @override
    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the command.

        Args:
            args: Positional arguments (unused).
            options: Command options (unused).

        Raises:
            CommandError: If storage is not configured or the store fails.
        """
        store = apps.get_app_config('uploads').object_store
        if store is None:
            raise CommandError(
                'Object store is not configured: set AWS_ACCESS_KEY_ID, '
                'AWS_SECRET_ACCESS_KEY and AWS_STORAGE_BUCKET_NAME',
            )

        bucket = store.bucket_name
        try:
            if store.bucket_exists(bucket):
                self.stdout.write(f'Bucket already exists: {bucket}')
                return
            store.create_bucket(bucket)
        except StorageOperationFailed as error:
            raise CommandError(str(error)) from error

        logger.info('Created upload bucket: %s', bucket)
        self.stdout.write(self.style.SUCCESS(f'Created bucket: {bucket}'))
