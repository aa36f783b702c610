import logging

from django.core.cache import cache
from django.test import TestCase
from mockito import unstub

logger = logging.getLogger()
logger.setLevel(logging.INFO)


class PriceUnitTestCase(TestCase):

    def setUp(self) -> None:
        cache.clear()

    def tearDown(self) -> None:
        unstub()
        cache.clear()
