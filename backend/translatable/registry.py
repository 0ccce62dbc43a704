import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Type

from django.core.exceptions import FieldDoesNotExist
from django.db import models
from django.utils.text import camel_case_to_spaces

from .conf import get_setting
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TranslationConfig:
    """Resolution policy of one translatable model."""

    fallback: bool = True
    reader: bool = True
    writer: bool = False
    nil_value: Any = ""


@dataclass(frozen=True)
class TranslationBinding:
    """
    Pairs a translatable model with its translation model.

    Built once when the translations are declared and handed to everything that
    resolves or writes a translated attribute.
    """

    parent_model: Type[models.Model]
    translation_model: Type[models.Model]
    fk_name: str
    fields: Tuple[str, ...]
    config: TranslationConfig
    related_name: str
    query_name: str

    @property
    def fk_attname(self):
        return self.translation_model._meta.get_field(self.fk_name).attname

    def translated_fields(self):
        """Parent field objects of the translated attributes, in declaration order."""
        return [self.parent_model._meta.get_field(name) for name in self.fields]


class TranslationRegistry:
    def __init__(self):
        self._by_parent: Dict[Type[models.Model], TranslationBinding] = {}
        self._by_translation: Dict[Type[models.Model], TranslationBinding] = {}

    def add(self, binding: TranslationBinding):
        self._by_parent[binding.parent_model] = binding
        self._by_translation[binding.translation_model] = binding
        logger.debug(
            f"Registered translations of {binding.parent_model._meta.label} "
            f"({', '.join(binding.fields)}) on {binding.translation_model._meta.label}"
        )

    def remove(self, model):
        binding = self._by_parent.pop(model, None)
        if binding is not None:
            self._by_translation.pop(binding.translation_model, None)
        return binding

    def is_registered(self, model):
        return model in self._by_parent

    def get_binding(self, model) -> Optional[TranslationBinding]:
        """Binding of ``model`` or of its nearest declared ancestor."""
        for klass in model.__mro__:
            binding = self._by_parent.get(klass)
            if binding is not None:
                return binding
        return None

    def get_binding_for_translation(self, model) -> Optional[TranslationBinding]:
        return self._by_translation.get(model)

    def bindings(self):
        return list(self._by_parent.values())


registry = TranslationRegistry()


def translation_model_name(parent):
    return f"{parent.__name__}Translation"


def translation_table_name(parent):
    return f"{parent._meta.concrete_model._meta.db_table}{get_setting('TABLE_SUFFIX')}"


def foreign_key_name(parent):
    """
    Name of the foreign key pointing from the translation model to ``parent``.

    Derived from the nearest concrete model so proxies share their concrete
    model's column name (``NewsPage`` proxy of ``Page`` gives ``page``).
    """
    concrete = parent._meta.concrete_model
    return camel_case_to_spaces(concrete.__name__).replace(" ", "_")


def mirror_field(field):
    """
    Clone a parent field for the translation table.

    Translation rows may omit any attribute, so the copy is optional, has no
    default and is never unique or primary.
    """
    name, path, args, kwargs = field.deconstruct()
    kwargs.update(null=True, blank=True, unique=False, primary_key=False)
    kwargs.pop("db_column", None)
    kwargs.pop("default", None)
    return field.__class__(*args, **kwargs)


def find_existing_translation_model(parent):
    try:
        return parent._meta.apps.get_registered_model(
            parent._meta.app_label, translation_model_name(parent)
        )
    except LookupError:
        return None


def create_translation_model(parent, fields, fk_name):
    """
    Build ``<Parent>Translation`` in the parent's module and app.
    """
    from .models import TranslationModel

    table = translation_table_name(parent)
    meta = type(
        "Meta",
        (),
        {
            "app_label": parent._meta.app_label,
            "db_table": table,
            "constraints": [
                models.UniqueConstraint(
                    fields=[fk_name, "locale"],
                    name=f"unique_locale_for_{table}",
                )
            ],
            "verbose_name": f"{parent._meta.verbose_name} translation",
            "verbose_name_plural": f"{parent._meta.verbose_name} translations",
        },
    )
    attrs = {
        "__module__": parent.__module__,
        "__qualname__": translation_model_name(parent),
        "Meta": meta,
        fk_name: models.ForeignKey(
            parent,
            on_delete=models.CASCADE,
            related_name=get_setting("RELATED_NAME"),
        ),
    }
    for field in fields:
        attrs[field.name] = mirror_field(field)

    model = type(translation_model_name(parent), (TranslationModel,), attrs)
    logger.debug(f"Created translation model {model._meta.label} ({table})")
    return model


def points_to(fk, parent):
    """
    Whether ``fk`` targets ``parent`` or one of its concrete ancestors.

    Works while the app registry is still loading; a lazy ``"app.Model"``
    reference is compared by label.
    """
    target = fk.remote_field.model
    concrete = parent._meta.concrete_model
    if isinstance(target, str):
        label = target if "." in target else f"{fk.model._meta.app_label}.{target}"
        return label.lower() in {
            klass._meta.label_lower
            for klass in concrete.__mro__
            if hasattr(klass, "_meta") and not klass._meta.abstract
        }
    return issubclass(concrete, target._meta.concrete_model)


def validate_translation_model(model, parent, fields, fk_name):
    """
    Check an explicitly written translation model against the declaration.
    """
    from .models import TranslationModel

    if not issubclass(model, TranslationModel):
        raise ConfigurationError(
            f"{model.__name__} must inherit from TranslationModel"
        )

    opts = model._meta
    try:
        fk = opts.get_field(fk_name)
    except FieldDoesNotExist:
        raise ConfigurationError(
            f"{model.__name__} has no foreign key '{fk_name}' to {parent.__name__}"
        )
    if not fk.many_to_one or not points_to(fk, parent):
        raise ConfigurationError(
            f"{model.__name__}.{fk_name} must be a ForeignKey to {parent.__name__}"
        )

    local_names = {f.name for f in opts.fields}
    missing = [field.name for field in fields if field.name not in local_names]
    if missing:
        raise ConfigurationError(
            f"{model.__name__} is missing translated fields: {', '.join(missing)}"
        )

    unique_sets = [set(c.fields) for c in opts.constraints if isinstance(c, models.UniqueConstraint)]
    unique_sets += [set(group) for group in opts.unique_together]
    if {fk_name, "locale"} not in unique_sets:
        logger.warning(
            f"{opts.label} has no unique constraint on ({fk_name}, locale); "
            "duplicate locales are only caught by validation"
        )
    return fk
