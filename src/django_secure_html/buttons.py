import logging
from dataclasses import dataclass, field, fields
from typing import Any, Optional

from django.core.exceptions import ImproperlyConfigured
from django.template.loader import render_to_string
from django.utils.safestring import mark_safe

from .conf import get_button_template, get_secure_renderer
from .utils import (
    RandomStringGenerator,
    attribute_value,
    is_empty_attribute,
    is_truthy,
    join_attributes,
    serialize_data_value,
)

logger = logging.getLogger(__name__)

# Keys accepted by ButtonConfig.from_data that differ from the field names
DATA_KEY_ALIASES = {"class": "css_class", "name": "element_name"}


@dataclass
class ButtonConfig:
    id: str = ""
    element_name: str = ""
    type: str = "button"
    title: str = ""
    label: str = ""
    css_class: str = ""
    disabled: bool = False
    value: Any = None
    data_attribute: dict = field(default_factory=dict)
    on_click: str = ""
    onclick: str = ""
    style: str = ""
    before_html: str = ""
    after_html: str = ""
    extra: dict = field(default_factory=dict)

    def __post_init__(self):
        self.disabled = is_truthy(self.disabled)

    @classmethod
    def from_data(cls, data: dict) -> "ButtonConfig":
        """
        Build a config from a flat dictionary of widget data.
        Keys that do not correspond to a known field are kept in 'extra'.
        """
        known = {f.name for f in fields(cls)} - {"extra"}
        kwargs = {}
        extra = {}
        for key, value in data.items():
            name = DATA_KEY_ALIASES.get(key, key)
            if name in known:
                kwargs[name] = value
            else:
                extra[key] = value
        return cls(**kwargs, extra=extra)


class Button:
    template_name = None
    base_classes = ("action-default", "scalable")
    hook_attribute = "backend-button-widget-hook-id"
    hook_prefix = "buttonId"
    hook_length = 32

    def __init__(self, config: ButtonConfig, random, renderer):
        if random is None or renderer is None:
            raise ImproperlyConfigured(
                "Button requires a random string generator and a secure renderer"
            )
        self.config = config
        self.random = random
        self.renderer = renderer
        self.hook_id = None
        self.after_html = config.after_html

    def get_type(self):
        if self.config.type in ("reset", "submit"):
            return self.config.type
        return "button"

    def get_on_click(self) -> Optional[str]:
        return self.config.on_click or self.config.onclick or None

    def get_attributes_html(self):
        disabled = "disabled" if self.config.disabled else ""
        title = self.config.title or self.config.label
        classes = list(self.base_classes)
        if self.config.css_class:
            classes.append(self.config.css_class)
        if disabled:
            classes.append(disabled)
        return self.attributes_to_html(self.prepare_attributes(title, classes, disabled))

    def prepare_attributes(self, title, classes, disabled) -> dict:
        attributes = {
            "id": self.config.id,
            "name": self.config.element_name,
            "title": title,
            "type": self.get_type(),
            "class": " ".join(classes),
            "value": attribute_value(self.config.value),
            "disabled": disabled,
        }
        if self.hook_id is not None:
            attributes[self.hook_attribute] = self.hook_id
        for key, value in self.config.data_attribute.items():
            attributes[f"data-{key}"] = serialize_data_value(value)
        return attributes

    def attributes_to_html(self, attributes: dict):
        return join_attributes(
            {
                key: value
                for key, value in attributes.items()
                if not is_empty_attribute(value)
            }
        )

    def hook_selector(self):
        return f"*[{self.hook_attribute}='{self.hook_id}']"

    def generate_style(self):
        """A rule that applies the inline style to this button only"""
        selector = f"#{self.config.id}" if self.config.id else self.hook_selector()
        return f"{selector} {{ {self.config.style} }}"

    def before_to_html(self):
        self.hook_id = self.hook_prefix + self.random.get_random_string(
            self.hook_length
        )
        after_html = self.config.after_html
        on_click = self.get_on_click()
        if on_click:
            after_html += self.renderer.render_event_listener_as_tag(
                "onclick", on_click, self.hook_selector()
            )
            logger.debug("Moved onclick of button %s into a script tag", self.hook_id)
        if self.config.style:
            after_html += self.renderer.render_tag(
                "style", {}, self.generate_style(), False
            )
            logger.debug("Moved style of button %s into a style tag", self.hook_id)
        self.after_html = mark_safe(after_html)
        return self

    def get_context(self):
        return {
            **self.config.extra,
            "button": self,
            "label": self.config.label,
            "attributes_html": self.get_attributes_html(),
            "before_html": mark_safe(self.config.before_html),
            "after_html": self.after_html,
        }

    def render(self):
        self.before_to_html()
        html = mark_safe(
            render_to_string(
                template_name=self.template_name or get_button_template(),
                context=self.get_context(),
            )
        )
        return html


def make_button(label="", renderer=None, **data):
    """
    Build a Button from keyword data, e.g. make_button("Save", on_click="save();").
    Without an explicit renderer one is built from the project settings.
    """
    config = ButtonConfig.from_data({"label": label, **data})
    return Button(
        config,
        random=RandomStringGenerator(),
        renderer=renderer or get_secure_renderer(),
    )
