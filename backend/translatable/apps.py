from django.apps import AppConfig
import logging

logger = logging.getLogger(__name__)


class TranslatableConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'translatable'

    def ready(self):
        from .conf import check_settings
        from .registry import registry

        check_settings()
        count = len(registry.bindings())
        if count > 0:
            logger.info(f"Translations declared for {count} models")
