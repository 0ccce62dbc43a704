import factory
from factory.django import DjangoModelFactory

from articles.models import (
    Article,
    ArticleTranslation,
    Category,
    CategoryTranslation,
    NewsPage,
    Team,
    TeamTranslation,
)


class ArticleFactory(DjangoModelFactory):
    class Meta:
        model = Article

    title = factory.Sequence(lambda n: f"Article {n}")
    description = factory.Faker("sentence")
    text = factory.Faker("paragraph")


class ArticleTranslationFactory(DjangoModelFactory):
    """Factory for article translations, Latvian unless told otherwise"""

    class Meta:
        model = ArticleTranslation

    article = factory.SubFactory(ArticleFactory)
    locale = "lv"
    title = factory.Sequence(lambda n: f"Raksts {n}")


class TeamFactory(DjangoModelFactory):
    class Meta:
        model = Team

    title = factory.Sequence(lambda n: f"Team {n}")
    text = factory.Faker("sentence")


class TeamTranslationFactory(DjangoModelFactory):
    class Meta:
        model = TeamTranslation

    team = factory.SubFactory(TeamFactory)
    locale = "lv"
    text = factory.Faker("sentence")


class CategoryFactory(DjangoModelFactory):
    class Meta:
        model = Category

    name = factory.Sequence(lambda n: f"Category {n}")
    position = factory.Sequence(lambda n: n)


class CategoryTranslationFactory(DjangoModelFactory):
    class Meta:
        model = CategoryTranslation

    category = factory.SubFactory(CategoryFactory)
    locale = "lv"
    name = factory.Sequence(lambda n: f"Kategorija {n}")


class NewsPageFactory(DjangoModelFactory):
    class Meta:
        model = NewsPage

    title = factory.Sequence(lambda n: f"News {n}")
    kind = "news"
