from django.core.exceptions import ImproperlyConfigured, ValidationError
from django.db import IntegrityError

__all__ = ["ConfigurationError", "ConstraintViolation", "ValidationError"]


class ConfigurationError(ImproperlyConfigured):
    """Raised when a translation declaration or the TRANSLATABLE setting is invalid."""


# Duplicate locales racing past TranslationModel.clean() surface from the
# unique index; the database error is propagated as is.
ConstraintViolation = IntegrityError
