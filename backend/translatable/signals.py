from django.db.models.signals import post_delete, post_save


def _loaded_parent(binding, translation):
    """Parent instance the translation was attached to in memory, if any."""
    field = binding.translation_model._meta.get_field(binding.fk_name)
    return field.get_cached_value(translation, default=None)


def _same_row(item, translation):
    return item is translation or (item.pk is not None and item.pk == translation.pk)


def connect_translation_signals(binding):
    """
    Keep loaded translation collections in step with saves and deletes.

    ``article.translations.create(...)`` attaches the new row to the very
    ``article`` instance; if that instance already materialised its
    translations, the new one is added to them.
    """

    def translation_saved(sender, instance, created, **kwargs):
        parent = _loaded_parent(binding, instance)
        if parent is None:
            return
        cache = parent.__dict__.get("_translation_cache")
        if cache is None:
            return
        for index, item in enumerate(cache):
            if _same_row(item, instance):
                cache[index] = instance
                return
        cache.append(instance)

    def translation_deleted(sender, instance, **kwargs):
        parent = _loaded_parent(binding, instance)
        if parent is None:
            return
        cache = parent.__dict__.get("_translation_cache")
        if cache is not None:
            cache[:] = [item for item in cache if not _same_row(item, instance)]

    post_save.connect(
        translation_saved,
        sender=binding.translation_model,
        weak=False,
        dispatch_uid="translatable_translation_saved",
    )
    post_delete.connect(
        translation_deleted,
        sender=binding.translation_model,
        weak=False,
        dispatch_uid="translatable_translation_deleted",
    )
