"""
Per-locale translated attributes for Django models.

Default-locale values stay on the model's own columns; every other locale
lives in one row of ``<Model>Translation`` per (instance, locale).
"""
