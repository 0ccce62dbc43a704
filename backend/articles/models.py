from django.db import models
from django.utils.translation import gettext_lazy as _

from translatable.models import TranslatableModel, TranslationModel
from translatable.options import TranslationOptions, register


class Article(TranslatableModel):
    title = models.CharField(_('title'), max_length=200, blank=True)
    description = models.CharField(_('description'), max_length=255, null=True, blank=True)
    text = models.TextField(_('text'), blank=True)
    slug = models.SlugField(_('slug'), unique=True, null=True, blank=True)

    class Meta:
        verbose_name = _('article')
        verbose_name_plural = _('articles')

    def __str__(self):
        return self.title or f"Article #{self.pk}"


@register(Article)
class ArticleTranslationOptions(TranslationOptions):
    fields = ("title", "description", "text")
    writer = True


ArticleTranslation = Article.get_translation_binding().translation_model


class FeaturedArticle(Article):
    class Meta:
        proxy = True
        verbose_name = _('featured article')
        verbose_name_plural = _('featured articles')


class Team(TranslatableModel):
    title = models.CharField(_('title'), max_length=200, blank=True)
    text = models.TextField(_('text'), null=True, blank=True)

    class Meta:
        verbose_name = _('team')
        verbose_name_plural = _('teams')


class TeamTranslation(TranslationModel):
    team = models.ForeignKey(
        Team, on_delete=models.CASCADE, related_name='translations', verbose_name=_('team'))
    text = models.TextField(_('text'), null=True, blank=True)

    class Meta:
        db_table = 'articles_team_translations'
        constraints = [
            models.UniqueConstraint(fields=['team', 'locale'], name='unique_locale_for_team'),
        ]


@register(Team)
class TeamTranslationOptions(TranslationOptions):
    fields = ("text",)
    nil_value = None


class Category(TranslatableModel):
    name = models.CharField(_('name'), max_length=100, blank=True)
    position = models.PositiveIntegerField(_('position'), default=0)

    class Meta:
        verbose_name = _('category')
        verbose_name_plural = _('categories')
        ordering = ['position', 'id']


@register(Category)
class CategoryTranslationOptions(TranslationOptions):
    fields = ("name",)
    fallback = False


CategoryTranslation = Category.get_translation_binding().translation_model


class Page(TranslatableModel):
    title = models.CharField(_('title'), max_length=200, blank=True)
    kind = models.CharField(_('kind'), max_length=20, default='page')


class NewsPage(Page):
    class Meta:
        proxy = True


@register(NewsPage)
class NewsPageTranslationOptions(TranslationOptions):
    fields = ("title",)


NewsPageTranslation = NewsPage.get_translation_binding().translation_model
