from django.db import models
from django.db.models.query import ModelIterable

from .conf import get_setting
from .locale import current_locale, default_locale, normalize_locale
from .registry import registry
from .resolution import stored_values


class TranslatableQuerySet(models.QuerySet):
    """Custom QuerySet for translatable models"""

    def translated(self, locale):
        """Rows having a translation for ``locale``."""
        binding = self.model.get_translation_binding()
        return self.filter(
            **{f"{binding.query_name}__locale": normalize_locale(locale)}
        )

    def with_translations(self):
        binding = self.model.get_translation_binding()
        return self.prefetch_related(binding.related_name)

    def bulk_create(self, objs, *args, **kwargs):
        with stored_values():
            return super().bulk_create(objs, *args, **kwargs)

    def bulk_update(self, objs, *args, **kwargs):
        with stored_values():
            return super().bulk_update(objs, *args, **kwargs)

    def _translations_lookup(self):
        if not get_setting("AUTO_PREFETCH"):
            return None
        if not issubclass(self._iterable_class, ModelIterable):
            return None
        binding = registry.get_binding(self.model)
        if binding is None or current_locale() == default_locale():
            return None
        for lookup in self._prefetch_related_lookups:
            if getattr(lookup, "prefetch_to", lookup) == binding.related_name:
                return None
        return binding.related_name

    def _fetch_all(self):
        # Outside the default locale every row needs its translations; load them
        # for the whole result set at once.
        if self._result_cache is None:
            lookup = self._translations_lookup()
            if lookup is not None:
                self._prefetch_related_lookups = self._prefetch_related_lookups + (lookup,)
        super()._fetch_all()


class TranslatableManager(models.Manager):
    """Custom Manager for translatable models"""

    def get_queryset(self):
        return TranslatableQuerySet(self.model, using=self._db)

    def translated(self, locale):
        return self.get_queryset().translated(locale)

    def with_translations(self):
        return self.get_queryset().with_translations()
