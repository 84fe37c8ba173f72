from dataclasses import replace

from django_secure_html.secure_renderer import SecurityProcessor

NONCE = "test-nonce"


class NonceProcessor(SecurityProcessor):
    """Adds a CSP nonce to script and style tags"""

    def process_tag(self, tag):
        if tag.tag_name not in ("script", "style"):
            return tag
        return replace(tag, attributes={**tag.attributes, "nonce": NONCE})


class SuffixProcessor(SecurityProcessor):
    """Appends a marker to tag content and handler javascript so the order of processors is visible"""

    def __init__(self, marker="1"):
        self.marker = marker

    def process_tag(self, tag):
        return replace(tag, content=(tag.content or "") + self.marker)

    def process_event_handler(self, event):
        return replace(event, javascript=event.javascript + self.marker)


class BrokenProcessor(SecurityProcessor):
    def process_tag(self, tag):
        return str(tag)


suffix_instance = SuffixProcessor("!")

not_a_processor = object()
