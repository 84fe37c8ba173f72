import json
import os

from django.core.exceptions import ImproperlyConfigured
from django.core.serializers.json import DjangoJSONEncoder
from django.utils.crypto import RANDOM_STRING_CHARS, get_random_string
from django.utils.html import escape
from django.utils.safestring import SafeString, mark_safe

SCALAR_TYPES = (str, int, float, bool)


class RandomStringGenerator:
    """
    Source of unpredictable identifiers used to bind generated tags to their element.
    Backed by the operating system's entropy pool through django.utils.crypto.
    """

    chars = RANDOM_STRING_CHARS

    def __init__(self, chars=None):
        try:
            os.urandom(1)
        except NotImplementedError:
            raise ImproperlyConfigured(
                "No cryptographically secure random source is available"
            )
        if chars is not None:
            self.chars = chars
        if not self.chars:
            raise ImproperlyConfigured("Random string alphabet cannot be empty")

    def get_random_string(self, length: int) -> str:
        return get_random_string(length, allowed_chars=self.chars)


def escape_html_attr(value) -> SafeString:
    """
    Escape a value for use inside a double-quoted attribute.
    Always escapes, even if the value has already been marked safe.
    """
    return escape(value)


def join_attributes(attributes: dict) -> SafeString:
    """Return 'key="value"' pairs separated by single spaces"""
    return mark_safe(
        " ".join(
            f'{key}="{escape_html_attr(value)}"' for key, value in attributes.items()
        )
    )


def is_empty_attribute(value) -> bool:
    # False is treated like an empty string so that boolean data values can switch an attribute off
    return value is None or value is False or value == ""


def attribute_value(value):
    """True is written as "1", everything else is left for the escaper to stringify"""
    if value is True:
        return "1"
    return value


def is_truthy(value) -> bool:
    # The string "0" switches a flag off, like an unchecked form value
    if value == "0":
        return False
    return bool(value)


def serialize_data_value(value):
    """Scalars and None pass through unchanged, anything else is compact JSON"""
    if value is None or isinstance(value, SCALAR_TYPES):
        return attribute_value(value)
    return json.dumps(value, cls=DjangoJSONEncoder, separators=(",", ":"))
