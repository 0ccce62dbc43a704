from django.core.exceptions import FieldDoesNotExist

from .conf import get_setting
from .exceptions import ConfigurationError
from .registry import (
    TranslationBinding,
    TranslationConfig,
    create_translation_model,
    find_existing_translation_model,
    foreign_key_name,
    registry,
    validate_translation_model,
)
from .resolution import TranslatedFieldDescriptor

OPTION_KEYS = ("fallback", "reader", "writer", "nil_value", "model")


class TranslationOptions:
    """
    Declaration of a model's translated attributes.

        @register(Article)
        class ArticleTranslationOptions(TranslationOptions):
            fields = ("title", "text")
            fallback = False

    Options left out take their ``TRANSLATABLE`` setting defaults.
    """

    fields = ()

    @classmethod
    def as_options(cls):
        options = {}
        for klass in reversed(cls.__mro__):
            if klass is object or klass is TranslationOptions:
                continue
            for key, value in vars(klass).items():
                if key.startswith("_") or key == "fields":
                    continue
                options[key] = value
        return options


def register(model):
    """
    Class decorator declaring translations for ``model`` from a TranslationOptions.
    """

    def wrapper(options_class):
        if not issubclass(options_class, TranslationOptions):
            raise ConfigurationError(
                f"{options_class.__name__} must inherit from TranslationOptions"
            )
        declare_translations(model, options_class.fields, **options_class.as_options())
        return options_class

    return wrapper


def build_config(options):
    unknown = sorted(set(options) - set(OPTION_KEYS))
    if unknown:
        raise ConfigurationError(f"Unknown translation options: {', '.join(unknown)}")
    return TranslationConfig(
        fallback=bool(options.get("fallback", get_setting("FALLBACK"))),
        reader=bool(options.get("reader", get_setting("READER"))),
        writer=bool(options.get("writer", get_setting("WRITER"))),
        nil_value=options.get("nil_value", get_setting("NIL_VALUE")),
    )


def translated_fields(model, names, fk_name):
    if isinstance(names, str) or not names:
        raise ConfigurationError(
            f"Translations of {model.__name__} need a non-empty list of field names"
        )

    fields = []
    for name in names:
        try:
            field = model._meta.get_field(name)
        except FieldDoesNotExist:
            raise ConfigurationError(f"{model.__name__} has no field '{name}'")
        if not field.concrete or field.is_relation or field.primary_key:
            raise ConfigurationError(
                f"{model.__name__}.{name} cannot be translated, only plain columns can"
            )
        if name in ("locale", fk_name):
            raise ConfigurationError(
                f"{model.__name__}.{name} clashes with a translation model field"
            )
        if field not in fields:
            fields.append(field)
    return fields


def declare_translations(model, fields, **options):
    """
    Declare the translated attributes of ``model``.

    :param model: Concrete or proxy model inheriting TranslatableModel
    :param fields: Names of the model's columns translated per locale
    :param options: fallback, reader, writer, nil_value and model
    :return: The TranslationBinding of ``model``
    """
    from .models import TranslatableModel

    if not issubclass(model, TranslatableModel):
        raise ConfigurationError(f"{model.__name__} must inherit from TranslatableModel")
    if model._meta.abstract:
        raise ConfigurationError(f"Abstract model {model.__name__} cannot be translated")
    declared = registry.get_binding(model)
    if declared is not None:
        raise ConfigurationError(
            f"Translations of {model.__name__} are already declared "
            f"on {declared.parent_model.__name__}"
        )

    config = build_config(options)
    fk_name = foreign_key_name(model)
    parent_fields = translated_fields(model, fields, fk_name)

    translation_model = options.get("model") or find_existing_translation_model(model)
    if translation_model is None:
        translation_model = create_translation_model(model, parent_fields, fk_name)
        fk = translation_model._meta.get_field(fk_name)
    else:
        fk = validate_translation_model(translation_model, model, parent_fields, fk_name)

    binding = TranslationBinding(
        parent_model=model,
        translation_model=translation_model,
        fk_name=fk_name,
        fields=tuple(field.name for field in parent_fields),
        config=config,
        related_name=fk.remote_field.get_accessor_name(),
        query_name=fk.related_query_name(),
    )

    if config.reader or config.writer:
        for field in parent_fields:
            setattr(model, field.attname, TranslatedFieldDescriptor(field, binding))

    from .signals import connect_translation_signals

    connect_translation_signals(binding)
    registry.add(binding)
    return binding
