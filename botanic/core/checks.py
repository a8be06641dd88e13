"""
System checks for the backend connection configuration
"""
from django.conf import settings
from django.core.checks import Error, Warning, register

from .backend_config import BACKEND_KEY_VAR, BACKEND_URL_VAR


@register('botanic')
def check_backend_config(app_configs=None, **kwargs):
    """
    Report an invalid backend endpoint/key (botanic.E001).

    Outside DEBUG this is an error, so management commands refuse to start
    against the local fallback database. In DEBUG it is only a warning.
    """
    config = getattr(settings, 'BACKEND_CONFIG', None)
    if config is None or config.is_valid:
        return []

    level = Error if getattr(settings, 'BACKEND_CONFIG_STRICT', not settings.DEBUG) else Warning
    return [
        level(
            'Backend configuration is invalid: ' + '; '.join(config.errors),
            hint=f'Set {BACKEND_URL_VAR} and {BACKEND_KEY_VAR} in the environment or in .env. '
                 'The local SQLite fallback is in use.',
            id='botanic.E001',
        )
    ]
