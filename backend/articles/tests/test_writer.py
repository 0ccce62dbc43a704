from articles.factories import (
    ArticleFactory,
    ArticleTranslationFactory,
    TeamFactory,
)
from articles.models import Article, ArticleTranslation, Team
from translatable.resolution import raw_values

from .utils import BaseTestCase


class WriterTests(BaseTestCase):
    """Article is declared with the writer enabled"""

    def test_default_locale_writes_own_column(self):
        article = ArticleFactory(title="EN Title")

        article.title = "Updated"
        article.save()

        self.assertEqual(Article.objects.get(pk=article.pk).title, "Updated")
        self.assertEqual(ArticleTranslation.objects.filter(article=article).count(), 0)

    def test_other_locale_builds_translation(self):
        article = ArticleFactory(title="EN Title")

        self.activate("lv")
        article.title = "LV Title"

        self.assertEqual(ArticleTranslation.objects.filter(article=article).count(), 0)
        self.assertEqual(article.title, "LV Title")
        with raw_values():
            self.assertEqual(article.title, "EN Title")

        article.save()

        translation = ArticleTranslation.objects.get(article=article)
        self.assertEqual(translation.locale, "lv")
        self.assertEqual(translation.title, "LV Title")

        self.activate("en")
        self.assertEqual(Article.objects.get(pk=article.pk).title, "EN Title")

    def test_other_locale_updates_existing_translation(self):
        article = ArticleFactory(title="EN Title")
        translation = ArticleTranslationFactory(article=article, locale="lv", title="Vecs")
        article = Article.objects.get(pk=article.pk)

        self.activate("lv")
        article.title = "Jauns"
        article.save()

        translation.refresh_from_db()
        self.assertEqual(translation.title, "Jauns")
        self.assertEqual(ArticleTranslation.objects.filter(article=article).count(), 1)

    def test_several_attributes_share_one_translation(self):
        article = ArticleFactory()

        self.activate("ru")
        article.title = "Заголовок"
        article.text = "Текст"
        article.save()

        translation = ArticleTranslation.objects.get(article=article)
        self.assertEqual(translation.title, "Заголовок")
        self.assertEqual(translation.text, "Текст")

    def test_pinned_locale_routes_writes(self):
        article = ArticleFactory(title="EN Title")

        article.pin_locale("ru").title = "RU Title"
        article.save()

        self.assertEqual(ArticleTranslation.objects.get(article=article).locale, "ru")
        self.assertEqual(Article.objects.get(pk=article.pk).title, "EN Title")

    def test_blank_new_translation_is_not_saved(self):
        article = ArticleFactory(title="EN Title")

        self.activate("lv")
        article.title = ""
        article.save()

        self.assertEqual(ArticleTranslation.objects.filter(article=article).count(), 0)
        self.assertIsNone(article.translation("lv"))

    def test_construction_and_loading_write_own_columns(self):
        self.activate("lv")
        article = Article.objects.create(title="Created in LV")

        self.assertEqual(ArticleTranslation.objects.filter(article=article).count(), 0)
        with raw_values():
            self.assertEqual(Article.objects.get(pk=article.pk).title, "Created in LV")


class ReadOnlyTests(BaseTestCase):
    """Team keeps the default writer option (disabled)"""

    def test_assignment_writes_own_column(self):
        team = TeamFactory(text="EN text")

        self.activate("lv")
        team.text = "LV text"
        team.save()

        self.assertFalse(team.translations.exists())
        with raw_values():
            self.assertEqual(Team.objects.get(pk=team.pk).text, "LV text")
