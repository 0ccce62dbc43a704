from django.test import TestCase
from django.utils import translation


class LocaleTestMixin:
    """Mixin resetting the active language around each test"""

    def setUp(self):
        super().setUp()
        translation.activate("en")
        self.addCleanup(translation.deactivate)

    def activate(self, locale):
        """Switch the active language for the rest of the test"""
        translation.activate(locale)


class BaseTestCase(LocaleTestMixin, TestCase):
    """Base test case with common utilities"""
    pass
