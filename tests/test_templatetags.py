from django.template import Context, Template

from django_secure_html.buttons import Button, ButtonConfig
from tests.processors import NONCE


def render(source, **context):
    return Template("{% load secure_html %}" + source).render(Context(context))


def test_secure_tag_escapes_text_content():
    html = render('{% secure_tag "p" text class="note" data_role="x" %}', text="<b>")
    assert html == '<p class="note" data-role="x">&lt;b&gt;</p>'


def test_secure_tag_verbatim_content():
    html = render('{% secure_tag "style" css text_content=False %}', css="a > b { color: red }")
    assert html == "<style>a > b { color: red }</style>"


def test_secure_tag_applies_processors(settings):
    settings.SECURE_HTML_PROCESSORS = ["tests.processors.NonceProcessor"]
    html = render('{% secure_tag "script" "go()" text_content=False %}')
    assert html == f'<script nonce="{NONCE}">go()</script>'


def test_event_listener():
    html = render('<a {% event_listener "onclick" js %}>x</a>', js='go("a")')
    assert html == '<a onclick="go(&quot;a&quot;)">x</a>'


def test_event_listener_tag():
    html = render('{% event_listener_tag "onclick" "go()" "#link" %}')
    assert html.startswith('<script type="text/javascript">')
    assert 'document.querySelector("#link")' in html
    assert 'addEventListener("click"' in html


def test_secure_button():
    html = render('{% secure_button "Save" on_click="save()" id="save" %}')
    element = html.split("</button>", 1)[0]
    assert 'id="save"' in element
    assert "onclick" not in element
    assert "save()" in html


def test_render_button_filter(random, secure_renderer):
    button = Button(ButtonConfig(label="Save"), random=random, renderer=secure_renderer)
    html = render("{{ button|render_button }}", button=button)
    assert "<span>Save</span></button>" in html
