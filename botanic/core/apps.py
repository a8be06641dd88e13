from django.apps import AppConfig


class CoreConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'botanic.core'
    label = 'core'

    def ready(self):
        """Import signals and system checks when app is ready"""
        import botanic.core.cache_signals  # noqa: F401  # Cache invalidation signals
        import botanic.core.checks  # noqa: F401
