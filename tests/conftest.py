import itertools

import pytest

from django_secure_html.secure_renderer import HtmlRenderer, SecureHtmlRenderer


class SequenceRandom:
    """Predictable stand in for RandomStringGenerator"""

    def __init__(self):
        self.counter = itertools.count()

    def get_random_string(self, length):
        return str(next(self.counter)).rjust(length, "a")


@pytest.fixture
def random():
    return SequenceRandom()


@pytest.fixture
def secure_renderer(random):
    return SecureHtmlRenderer(HtmlRenderer(), random)
