from django.conf import settings
from django.utils import translation


def normalize_locale(locale):
    """Language code in Django's form: ``pt_BR`` and ``pt-BR`` give ``pt-br``."""
    if locale is None:
        return None
    return translation.to_language(str(locale))


def default_locale():
    return normalize_locale(settings.LANGUAGE_CODE)


def current_locale():
    """Active language of the current thread, or the default one when i18n is off."""
    return normalize_locale(translation.get_language()) or default_locale()


def available_locales():
    return [normalize_locale(code) for code, _name in settings.LANGUAGES]
