import functools
import logging

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.core.signals import setting_changed
from django.dispatch import receiver
from django.utils.module_loading import import_string

from .secure_renderer import HtmlRenderer, SecureHtmlRenderer, SecurityProcessor
from .utils import RandomStringGenerator

logger = logging.getLogger(__name__)

DEFAULT_PROCESSORS = []
DEFAULT_BUTTON_TEMPLATE = "django_secure_html/button.html"


def get_processor_paths():
    paths = getattr(settings, "SECURE_HTML_PROCESSORS", DEFAULT_PROCESSORS)
    if not isinstance(paths, (list, tuple)):
        raise ImproperlyConfigured("SECURE_HTML_PROCESSORS must be a list or tuple")
    return paths


def get_button_template():
    return getattr(settings, "SECURE_HTML_BUTTON_TEMPLATE", DEFAULT_BUTTON_TEMPLATE)


def load_processor(path: str) -> SecurityProcessor:
    """
    Import a processor from its dotted path.
    The path may name a SecurityProcessor subclass, which is instantiated without
    arguments, or a ready made instance.
    """
    try:
        obj = import_string(path)
    except ImportError as e:
        raise ImproperlyConfigured(f"Cannot import security processor '{path}': {e}")
    if isinstance(obj, type) and issubclass(obj, SecurityProcessor):
        obj = obj()
    if not isinstance(obj, SecurityProcessor):
        raise ImproperlyConfigured(
            f"'{path}' is not a SecurityProcessor subclass or instance"
        )
    logger.debug("Loaded security processor %s", path)
    return obj


def load_processors():
    return [load_processor(path) for path in get_processor_paths()]


@functools.lru_cache(maxsize=None)
def get_processors():
    """Processors named in settings, imported once and shared by every renderer"""
    return tuple(load_processors())


@receiver(setting_changed)
def clear_processor_cache(*, setting, **kwargs):
    if setting == "SECURE_HTML_PROCESSORS":
        get_processors.cache_clear()


def get_secure_renderer() -> SecureHtmlRenderer:
    """Build a renderer wired with the processors named in settings"""
    return SecureHtmlRenderer(
        renderer=HtmlRenderer(),
        random=RandomStringGenerator(),
        processors=get_processors(),
    )
