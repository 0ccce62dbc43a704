from django.core.exceptions import FieldDoesNotExist
from django.db import models
from django.test import SimpleTestCase
from django.test.utils import isolate_apps

from articles.models import (
    Article,
    Category,
    FeaturedArticle,
    NewsPage,
    Page,
    Team,
    TeamTranslation,
)
from translatable.exceptions import ConfigurationError
from translatable.models import TranslatableModel, TranslationModel
from translatable.options import TranslationOptions, declare_translations, register
from translatable.registry import points_to, registry
from translatable.resolution import TranslatedFieldDescriptor


class BindingTests(SimpleTestCase):

    def test_derived_translation_model(self):
        binding = Article.get_translation_binding()
        model = binding.translation_model

        self.assertEqual(model.__name__, "ArticleTranslation")
        self.assertEqual(model.__module__, "articles.models")
        self.assertEqual(model._meta.app_label, "articles")
        self.assertEqual(model._meta.db_table, "articles_article_translations")
        self.assertEqual(binding.fk_name, "article")
        self.assertEqual(binding.fields, ("title", "description", "text"))
        self.assertEqual(binding.related_name, "translations")

    def test_query_name_follows_foreign_key(self):
        self.assertEqual(Article.get_translation_binding().query_name, "translations")
        self.assertEqual(Team.get_translation_binding().query_name, "translations")
        self.assertEqual(NewsPage.get_translation_binding().query_name, "translations")

    def test_mirrored_fields_are_optional(self):
        model = Article.get_translation_binding().translation_model

        title = model._meta.get_field("title")
        self.assertIsInstance(title, models.CharField)
        self.assertEqual(title.max_length, 200)
        self.assertTrue(title.null)
        self.assertTrue(title.blank)
        self.assertIsInstance(model._meta.get_field("text"), models.TextField)
        self.assertEqual(model._meta.get_field("locale").max_length, 5)

    def test_foreign_key_cascades(self):
        model = Article.get_translation_binding().translation_model
        fk = model._meta.get_field("article")

        self.assertIs(fk.related_model, Article)
        self.assertIs(fk.remote_field.on_delete, models.CASCADE)
        self.assertFalse(fk.null)

    def test_unique_locale_constraint(self):
        model = Category.get_translation_binding().translation_model
        constraint_fields = [tuple(c.fields) for c in model._meta.constraints]

        self.assertIn(("category", "locale"), constraint_fields)

    def test_explicit_translation_model_is_used(self):
        binding = Team.get_translation_binding()

        self.assertIs(binding.translation_model, TeamTranslation)
        self.assertEqual(binding.fk_name, "team")
        self.assertIs(registry.get_binding_for_translation(TeamTranslation), binding)

    def test_proxy_uses_concrete_model_for_names(self):
        binding = NewsPage.get_translation_binding()

        self.assertEqual(binding.fk_name, "page")
        self.assertEqual(binding.translation_model._meta.db_table, "articles_page_translations")
        self.assertEqual(binding.fk_attname, "page_id")

    def test_descriptors_installed_on_declaring_model_only(self):
        self.assertIsInstance(NewsPage.__dict__["title"], TranslatedFieldDescriptor)
        self.assertNotIsInstance(Page.__dict__["title"], TranslatedFieldDescriptor)

    def test_declared_configuration(self):
        self.assertTrue(Article.get_translation_binding().config.writer)
        self.assertFalse(Category.get_translation_binding().config.fallback)
        self.assertIsNone(Team.get_translation_binding().config.nil_value)
        self.assertEqual(Article.get_translation_binding().config.nil_value, "")

    def test_undeclared_model_has_no_binding(self):
        with self.assertRaises(ConfigurationError):
            Page.get_translation_binding()

    def test_subclass_resolves_nearest_declared_model(self):
        self.assertIs(registry.get_binding(FeaturedArticle), Article.get_translation_binding())
        self.assertFalse(registry.is_registered(FeaturedArticle))

    def test_lazy_foreign_key_reference_is_matched_by_label(self):
        fk = models.ForeignKey("articles.Team", on_delete=models.CASCADE)

        self.assertTrue(points_to(fk, Team))
        self.assertFalse(points_to(fk, Article))


@isolate_apps("articles")
class DeclarationTests(SimpleTestCase):

    def declare(self, model, fields, **options):
        binding = declare_translations(model, fields, **options)
        self.addCleanup(registry.remove, model)
        return binding

    def test_declare_creates_translation_model(self):
        class Draft(TranslatableModel):
            title = models.CharField(max_length=50)
            body = models.TextField(blank=True)

        binding = self.declare(Draft, ["title"], fallback=False, nil_value=None)

        self.assertEqual(binding.translation_model.__name__, "DraftTranslation")
        self.assertEqual(binding.fields, ("title",))
        self.assertFalse(binding.config.fallback)
        self.assertIsNone(binding.config.nil_value)
        self.assertFalse(binding.config.writer)
        with self.assertRaises(FieldDoesNotExist):
            binding.translation_model._meta.get_field("body")

    def test_multi_word_model_name(self):
        class NewsItem(TranslatableModel):
            headline = models.CharField(max_length=50)

        binding = self.declare(NewsItem, ["headline"])

        self.assertEqual(binding.fk_name, "news_item")

    def test_register_decorator(self):
        class Note(TranslatableModel):
            body = models.TextField()

        @register(Note)
        class NoteTranslationOptions(TranslationOptions):
            fields = ("body",)
            reader = False

        self.addCleanup(registry.remove, Note)
        self.assertFalse(Note.get_translation_binding().config.reader)
        self.assertNotIsInstance(Note.__dict__["body"], TranslatedFieldDescriptor)

    def test_unknown_option_is_rejected(self):
        class Draft(TranslatableModel):
            title = models.CharField(max_length=50)

        with self.assertRaises(ConfigurationError):
            declare_translations(Draft, ["title"], nil=None)
        self.assertFalse(registry.is_registered(Draft))

    def test_unknown_options_class_attribute_is_rejected(self):
        class Draft(TranslatableModel):
            title = models.CharField(max_length=50)

        with self.assertRaises(ConfigurationError):
            @register(Draft)
            class DraftTranslationOptions(TranslationOptions):
                fields = ("title",)
                fallbak = False

    def test_missing_field_is_rejected(self):
        class Draft(TranslatableModel):
            title = models.CharField(max_length=50)

        with self.assertRaises(ConfigurationError):
            declare_translations(Draft, ["title", "subtitle"])

    def test_empty_fields_are_rejected(self):
        class Draft(TranslatableModel):
            title = models.CharField(max_length=50)

        with self.assertRaises(ConfigurationError):
            declare_translations(Draft, [])
        with self.assertRaises(ConfigurationError):
            declare_translations(Draft, "title")

    def test_relations_cannot_be_translated(self):
        class Draft(TranslatableModel):
            parent = models.ForeignKey("self", on_delete=models.CASCADE, null=True)

        with self.assertRaises(ConfigurationError):
            declare_translations(Draft, ["parent"])

    def test_field_named_locale_is_rejected(self):
        class Draft(TranslatableModel):
            locale = models.CharField(max_length=5)

        with self.assertRaises(ConfigurationError):
            declare_translations(Draft, ["locale"])

    def test_plain_models_are_rejected(self):
        class Plain(models.Model):
            title = models.CharField(max_length=50)

        with self.assertRaises(ConfigurationError):
            declare_translations(Plain, ["title"])

    def test_second_declaration_is_rejected(self):
        class Draft(TranslatableModel):
            title = models.CharField(max_length=50)

        self.declare(Draft, ["title"])

        with self.assertRaises(ConfigurationError):
            declare_translations(Draft, ["title"])

    def test_explicit_model_must_match_declaration(self):
        class Draft(TranslatableModel):
            title = models.CharField(max_length=50)
            body = models.TextField()

        class DraftTranslation(TranslationModel):
            draft = models.ForeignKey(Draft, on_delete=models.CASCADE, related_name="translations")
            title = models.CharField(max_length=50, null=True)

        with self.assertRaises(ConfigurationError):
            declare_translations(Draft, ["title", "body"])

        binding = self.declare(Draft, ["title"])
        self.assertIs(binding.translation_model, DraftTranslation)

    def test_subclass_of_declared_model_is_rejected(self):
        class Draft(TranslatableModel):
            title = models.CharField(max_length=50)

        class PublishedDraft(Draft):
            class Meta:
                proxy = True

        self.declare(Draft, ["title"])

        with self.assertRaises(ConfigurationError):
            declare_translations(PublishedDraft, ["title"])
