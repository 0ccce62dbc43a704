from contextlib import contextmanager
from contextvars import ContextVar

from django.db.models.query_utils import DeferredAttribute

from .locale import default_locale

OWN_VALUES = "own"
STORED_VALUES = "stored"

_read_mode = ContextVar("translatable_read_mode", default=None)


@contextmanager
def _reading(mode):
    token = _read_mode.set(mode)
    try:
        yield
    finally:
        _read_mode.reset(token)


def raw_values():
    """
    Read translated fields as the parent's own values, ignoring translations.

    Blank own values still read as the model's ``nil_value``.
    """
    return _reading(OWN_VALUES)


def stored_values():
    """
    Read translated fields as the columns stored on the parent row.

    Django reads field values through the model attributes when saving,
    validating and refreshing; those paths must see the columns, not the
    resolved translations.
    """
    return _reading(STORED_VALUES)


def raw_values_active():
    return _read_mode.get() is not None


class OriginString(str):
    """A resolved string that remembers which instance and attribute produced it."""

    origin_instance = None
    origin_field = None


def with_origin(value, instance, name):
    if isinstance(value, str):
        value = OriginString(value)
        value.origin_instance = instance
        value.origin_field = name
    return value


def is_blank(value):
    return value is None or (isinstance(value, str) and not value.strip())


def own_value(instance, binding, name, stored):
    if is_blank(stored):
        return binding.config.nil_value
    return with_origin(stored, instance, name)


def resolve_value(instance, binding, name, stored):
    """
    Value of translated attribute ``name`` for the instance's active locale.

    :param instance: Translatable model instance
    :param binding: TranslationBinding of the instance's model
    :param name: Translated attribute name
    :param stored: Value stored in the parent's own column
    :return: Translation, parent value or the configured nil value
    """
    active = instance.active_locale
    if active == default_locale():
        return own_value(instance, binding, name, stored)

    translation = instance.translation(active)
    if translation is None:
        if binding.config.fallback:
            return own_value(instance, binding, name, stored)
        return binding.config.nil_value

    return with_origin(getattr(translation, name), instance, name)


def write_value(instance, binding, name, value):
    """
    Route an assignment to the parent column or to the active locale's translation.
    """
    active = instance.active_locale
    if active == default_locale():
        instance.__dict__[name] = value
        return
    translation = instance.find_or_build_translation(active, build=True)
    setattr(translation, name, value)
    instance.queue_translation(translation)


class TranslatedFieldDescriptor(DeferredAttribute):
    """
    Replaces the field attribute of a translated column on the parent model.
    """

    def __init__(self, field, binding):
        super().__init__(field)
        self.binding = binding

    def __get__(self, instance, cls=None):
        if instance is None:
            return self
        stored = super().__get__(instance, cls)
        mode = _read_mode.get()
        if mode == STORED_VALUES or not self.binding.config.reader:
            return stored
        if mode == OWN_VALUES:
            return own_value(instance, self.binding, self.field.attname, stored)
        return resolve_value(instance, self.binding, self.field.attname, stored)

    def __set__(self, instance, value):
        if (
            self.binding.config.writer
            and not raw_values_active()
            and instance.__dict__.get("_translatable_ready", False)
        ):
            write_value(instance, self.binding, self.field.attname, value)
        else:
            instance.__dict__[self.field.attname] = value
