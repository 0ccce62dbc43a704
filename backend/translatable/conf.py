from django.conf import settings

from .exceptions import ConfigurationError

DEFAULTS = {
    "FALLBACK": True,
    "READER": True,
    "WRITER": False,
    "NIL_VALUE": "",
    "LOCALE_MAX_LENGTH": 5,
    "TABLE_SUFFIX": "_translations",
    "RELATED_NAME": "translations",
    "AUTO_PREFETCH": True,
}


def get_setting(name):
    """
    Get a translatable setting, falling back to its default.

    :param name: Key of the ``TRANSLATABLE`` setting dict
    :return: Configured value or default
    """
    user_settings = getattr(settings, "TRANSLATABLE", {})
    if name in user_settings:
        return user_settings[name]
    return DEFAULTS[name]


def check_settings():
    """
    Reject unknown keys in the ``TRANSLATABLE`` setting.
    """
    user_settings = getattr(settings, "TRANSLATABLE", {})
    unknown = sorted(set(user_settings) - set(DEFAULTS))
    if unknown:
        raise ConfigurationError(
            f"Unknown TRANSLATABLE settings: {', '.join(unknown)}"
        )
