"""Overriding settings for development environment."""

from server.settings.components import config

DEBUG = True

SECRET_KEY = config(
    'DJANGO_SECRET_KEY',
    default='django-insecure-development-only',
)

ALLOWED_HOSTS = [
    config('DOMAIN_NAME', default='localhost'),
    '127.0.0.1',
    '[::1]',
    'testserver',
]
