from django.apps import AppConfig


class SecureHtmlConfig(AppConfig):
    name = "django_secure_html"
    verbose_name = "Secure HTML"

    def ready(self):
        """Fail at startup rather than on first render if a processor cannot be loaded."""
        from .conf import load_processors

        load_processors()
