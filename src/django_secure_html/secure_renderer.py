import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from django.core.exceptions import ImproperlyConfigured
from django.utils.html import escape
from django.utils.safestring import SafeString, mark_safe

from .utils import escape_html_attr, join_attributes

logger = logging.getLogger(__name__)

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    }
)


@dataclass(frozen=True)
class TagData:
    """
    A tag that is about to be rendered.
    Attribute values must not be escaped; the renderer escapes them.
    """

    tag_name: str
    attributes: Mapping[str, str] = field(default_factory=dict)
    content: Optional[str] = None
    text_content: bool = True

    def __post_init__(self):
        if not self.tag_name:
            raise ValueError("Tag name cannot be empty.")
        # Read-only copy, so neither the caller nor a processor can change it in place
        object.__setattr__(
            self, "attributes", MappingProxyType(dict(self.attributes))
        )


@dataclass(frozen=True)
class EventHandlerData:
    """An event handler that would be rendered as an attribute, e.g. onclick="..." """

    event_name: str
    javascript: str

    def __post_init__(self):
        if not self.event_name:
            raise ValueError("Event name cannot be empty.")


class SecurityProcessor:
    """
    Transforms tags and event handlers before they are rendered.
    Subclasses override one or both methods and must return a new instance of the
    same type rather than modifying the one passed in.
    """

    def process_tag(self, tag: TagData) -> TagData:
        return tag

    def process_event_handler(self, event: EventHandlerData) -> EventHandlerData:
        return event


class HtmlRenderer:
    """Serialises processed tag and event handler data to markup"""

    void_elements = VOID_ELEMENTS

    def render_tag(self, tag: TagData) -> SafeString:
        attrs = join_attributes(tag.attributes)
        opening = f"<{tag.tag_name} {attrs}>" if attrs else f"<{tag.tag_name}>"
        if tag.tag_name.lower() in self.void_elements:
            return mark_safe(opening)
        content = tag.content or ""
        if tag.text_content:
            content = escape(content)
        return mark_safe(f"{opening}{content}</{tag.tag_name}>")

    def render_event_handler(self, event: EventHandlerData) -> SafeString:
        return mark_safe(f'{event.event_name}="{escape_html_attr(event.javascript)}"')


class SecureHtmlRenderer:
    """
    Render HTML elements with consideration to application security.
    Every tag and event handler passes through the processors, in order, before it is serialised.
    """

    listener_prefix = "eventListener"
    element_prefix = "listenedElement"
    identifier_length = 32

    def __init__(self, renderer, random, processors: Iterable[SecurityProcessor] = ()):
        if renderer is None:
            raise ImproperlyConfigured("SecureHtmlRenderer requires an HtmlRenderer")
        if random is None:
            raise ImproperlyConfigured(
                "SecureHtmlRenderer requires a random string generator"
            )
        self.renderer = renderer
        self.random = random
        self.processors = tuple(processors)

    def render_tag(
        self,
        tag_name: str,
        attributes: dict,
        content: Optional[str] = None,
        text_content: bool = True,
    ) -> SafeString:
        """
        Render a tag such as "script" or "style".
        Content is escaped when text_content is True and inserted verbatim otherwise,
        so only pass text_content=False for markup generated by trusted code.
        """
        tag = TagData(tag_name, attributes, content, text_content)
        for processor in self.processors:
            processed = processor.process_tag(tag)
            if not isinstance(processed, TagData):
                raise ImproperlyConfigured(
                    f"{processor.__class__.__name__}.process_tag() must return TagData"
                )
            if processed != tag:
                logger.debug(
                    "%s rewrote <%s> tag", processor.__class__.__name__, tag.tag_name
                )
            tag = processed
        return self.renderer.render_tag(tag)

    def render_event_listener(self, event_name: str, javascript: str) -> SafeString:
        """Render an event listener as an attribute, e.g. onclick="..." """
        event = EventHandlerData(event_name, javascript)
        for processor in self.processors:
            event = processor.process_event_handler(event)
            if not isinstance(event, EventHandlerData):
                raise ImproperlyConfigured(
                    f"{processor.__class__.__name__}.process_event_handler() must return EventHandlerData"
                )
        return self.renderer.render_event_handler(event)

    def render_event_listener_as_tag(
        self, event_name: str, javascript: str, element_selector: str
    ) -> SafeString:
        """
        Render the javascript that would have gone into an on* attribute as a separate script tag.
        The listener is only attached when element_selector matches an element on the page.
        element_selector is inserted as is and must never contain user input.
        """
        event = event_name[2:].lower()
        listener = self.listener_prefix + self.random.get_random_string(
            self.identifier_length
        )
        element = self.element_prefix + self.random.get_random_string(
            self.identifier_length
        )
        script = (
            f"function {listener} () {{\n"
            f"    {javascript};\n"
            f"}}\n"
            f'let {element} = document.querySelector("{element_selector}");\n'
            f"if ({element}) {{\n"
            f'    {element}.addEventListener("{event}", (event) => {listener}.apply(event.target));\n'
            f"}}\n"
        )
        return self.render_tag("script", {"type": "text/javascript"}, script, False)
