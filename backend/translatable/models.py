from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _

from .conf import get_setting
from .exceptions import ConfigurationError
from .locale import available_locales, current_locale, default_locale, normalize_locale
from .managers import TranslatableManager
from .registry import registry
from .resolution import is_blank, resolve_value, stored_values


class TranslationModel(models.Model):
    """
    One locale's values of a translatable model's translated attributes.
    """

    locale = models.CharField(_("locale"), max_length=get_setting("LOCALE_MAX_LENGTH"))

    class Meta:
        abstract = True

    def __str__(self):
        binding = registry.get_binding_for_translation(type(self))
        if binding is None:
            return f"{self.locale}"
        return f"{binding.parent_model.__name__} #{getattr(self, binding.fk_attname)}/{self.locale}"

    def clean(self):
        super().clean()
        if self.locale:
            self.locale = normalize_locale(self.locale)
        binding = registry.get_binding_for_translation(type(self))
        if binding is None or not self.locale:
            return
        parent_id = getattr(self, binding.fk_attname)
        if parent_id is None:
            return
        duplicates = type(self)._default_manager.filter(
            **{binding.fk_attname: parent_id, "locale": self.locale}
        ).exclude(pk=self.pk)
        if duplicates.exists():
            raise ValidationError(
                {"locale": _("A translation for this locale already exists.")}
            )

    def save(self, *args, **kwargs):
        # The unique index stays authoritative for concurrent writers.
        self.full_clean(validate_constraints=False)
        super().save(*args, **kwargs)


class TranslatableModel(models.Model):
    """
    Base class of models whose attributes are translated per locale.

    Values of the default locale stay on the model's own columns, other locales
    are read from the ``translations`` relation. Declare the translated
    attributes with ``translatable.options.register`` right after the model.
    """

    objects = TranslatableManager()

    class Meta:
        abstract = True

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._translatable_ready = True

    @classmethod
    def get_translation_binding(cls):
        binding = registry.get_binding(cls)
        if binding is None:
            raise ConfigurationError(f"No translations declared for {cls.__name__}")
        return binding

    @classmethod
    def sync_translation_table(cls):
        from .schema import sync_translation_table

        return sync_translation_table(cls)

    @property
    def active_locale(self):
        pinned = self.__dict__.get("_pinned_locale")
        return pinned or current_locale()

    def pin_locale(self, locale):
        """
        Force the locale used to resolve this instance's translated attributes.

            >>> translation.activate("lv")
            >>> article.title
            'LV title'
            >>> article.pin_locale("en").title
            'EN title'

        Pass ``None`` to follow the active language again.
        """
        self._pinned_locale = normalize_locale(locale)
        return self

    def resolve_attribute(self, name):
        binding = self.get_translation_binding()
        if name not in binding.fields:
            raise AttributeError(f"{name} is not a translated attribute of {type(self).__name__}")
        with stored_values():
            stored = getattr(self, name)
        return resolve_value(self, binding, name, stored)

    def loaded_translations(self):
        """
        Translations held by this instance.

        Materialised once: from the prefetch cache when the queryset loaded them,
        otherwise with a single query. Unsaved instances start empty.
        """
        cache = self.__dict__.get("_translation_cache")
        if cache is None:
            binding = self.get_translation_binding()
            if self.pk is None:
                cache = []
            else:
                prefetched = getattr(self, "_prefetched_objects_cache", {}).get(
                    binding.related_name
                )
                if prefetched is None:
                    prefetched = getattr(self, binding.related_name).all()
                cache = list(prefetched)
            self._translation_cache = cache
        return cache

    def translation(self, locale):
        locale = normalize_locale(locale)
        for translation in self.loaded_translations():
            if normalize_locale(translation.locale) == locale:
                return translation
        return None

    def has_translation(self, locale):
        if normalize_locale(locale) == default_locale():
            return True
        return self.translation(locale) is not None

    def new_translation(self, locale):
        binding = self.get_translation_binding()
        return binding.translation_model(
            **{binding.fk_name: self, "locale": normalize_locale(locale)}
        )

    def find_or_build_translation(self, locale, build=False):
        """
        Existing translation for ``locale`` or a new unsaved one.

        With ``build`` the new translation joins this instance's translations
        and is saved with the next ``save()``.
        """
        translation = self.translation(locale)
        if translation is not None:
            return translation
        translation = self.new_translation(locale)
        if build:
            self.loaded_translations().append(translation)
            self.queue_translation(translation)
        return translation

    def all_translations(self):
        """
        Translation of every available locale, built in memory where missing.

        Useful when rendering a form with one block per language; the built
        translations are never saved by this call.
        """
        return {
            locale: self.find_or_build_translation(locale)
            for locale in available_locales()
        }

    def build_nested_translations(self):
        default = default_locale()
        for locale in available_locales():
            if locale != default and self.translation(locale) is None:
                self.find_or_build_translation(locale, build=True)

    def queue_translation(self, translation):
        pending = self.__dict__.setdefault("_pending_translations", [])
        if not any(item is translation for item in pending):
            pending.append(translation)

    def save_translations(self):
        pending = self.__dict__.pop("_pending_translations", [])
        if not pending:
            return
        binding = self.get_translation_binding()
        for translation in pending:
            if translation._state.adding and all(
                is_blank(getattr(translation, name)) for name in binding.fields
            ):
                self._forget_translation(translation)
                continue
            setattr(translation, binding.fk_name, self)
            translation.save()

    def _forget_translation(self, translation):
        cache = self.__dict__.get("_translation_cache")
        if cache is not None:
            cache[:] = [item for item in cache if item is not translation]

    def save(self, *args, **kwargs):
        with stored_values():
            super().save(*args, **kwargs)
        self.save_translations()

    def full_clean(self, *args, **kwargs):
        with stored_values():
            super().full_clean(*args, **kwargs)

    def refresh_from_db(self, using=None, fields=None, **kwargs):
        with stored_values():
            super().refresh_from_db(using=using, fields=fields, **kwargs)
        if fields is None:
            self.__dict__.pop("_translation_cache", None)
            self.__dict__.pop("_pending_translations", None)
