"""
Django secure HTML
==================
Render backend widgets so that pages keep working under a strict Content-Security-Policy.
Inline ``onclick`` handlers and ``style`` attributes are never written onto the element itself;
instead they are moved into separate ``<script>`` and ``<style>`` tags bound to the element through
a randomly generated hook attribute.

Key features
============
* ``Button`` widget with a fixed, predictable attribute order
* ``SecureHtmlRenderer`` that passes every generated tag and event handler through a chain of
  security processors (for example to add CSP nonces) before serialising it
* Template tags to use the renderer directly from Django templates
* Processors configured through the ``SECURE_HTML_PROCESSORS`` setting
"""
__version__ = "0.1"
