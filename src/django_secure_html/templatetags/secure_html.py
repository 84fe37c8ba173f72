from django import template

from django_secure_html.buttons import make_button
from django_secure_html.conf import get_secure_renderer

register = template.Library()


@register.simple_tag
def secure_tag(tag_name, content=None, text_content=True, **attrs):
    """Render a tag through the configured security processors, converting '_' to '-' in attribute names"""
    attributes = {key.replace("_", "-"): value for key, value in attrs.items()}
    return get_secure_renderer().render_tag(tag_name, attributes, content, text_content)


@register.simple_tag
def event_listener(event_name, javascript):
    return get_secure_renderer().render_event_listener(event_name, javascript)


@register.simple_tag
def event_listener_tag(event_name, javascript, selector):
    return get_secure_renderer().render_event_listener_as_tag(
        event_name, javascript, selector
    )


@register.simple_tag
def secure_button(label="", **data):
    return make_button(label, **data).render()


@register.filter
def render_button(button):
    return button.render()
