"""Object store configuration for S3-compatible backends.

Works with AWS S3, MinIO for local development and Cloudflare R2.
Access key, secret key and bucket are all-or-nothing: if any of them
is missing the app still starts, but uploads and deletes are refused.
"""

from server.settings.components import config

AWS_ACCESS_KEY_ID = config('AWS_ACCESS_KEY_ID', default='')
AWS_SECRET_ACCESS_KEY = config('AWS_SECRET_ACCESS_KEY', default='')
AWS_STORAGE_BUCKET_NAME = config('AWS_STORAGE_BUCKET_NAME', default='')

AWS_S3_ENDPOINT_URL = config('AWS_S3_ENDPOINT_URL', default=None)
AWS_S3_REGION_NAME = config('AWS_S3_REGION_NAME', default=None)

# Public address of objects: {base}/{bucket}/{id}/{name}
UPLOADS_OBJECT_URL_BASE = config(
    'UPLOADS_OBJECT_URL_BASE',
    default='https://s3.amazonaws.com',
)
