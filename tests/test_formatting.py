"""Tests for to_html with injected and missing renderers."""
import logging

from textslug import to_html
import textslug.text.formatting as formatting


def test_to_html_with_renderer():
    assert to_html("hi", renderer=lambda text: "\t<p>hi</p>") == "<p>hi</p>"


def test_to_html_removes_blank_lines():
    rendered = "\t<p>a</p>\n\n\t<p>b</p>"
    assert to_html("a\n\nb", renderer=lambda text: rendered) == "<p>a</p><p>b</p>"


def test_to_html_keeps_blank_lines_in_pre_blocks():
    rendered = "<pre>a\n\nb</pre>"
    assert to_html("<pre>a\n\nb</pre>", renderer=lambda text: rendered) == "<pre>a\n\nb</pre>"


def test_to_html_lite_mode():
    assert to_html("*hi*", lite_mode=True, renderer=lambda text: "\t<p><strong>hi</strong></p>") == "<strong>hi</strong>"
    two = "<p>a</p>\n<p>b</p>"
    assert to_html("a\n\nb", lite_mode=True, renderer=lambda text: two) == two


def test_to_html_without_renderer(monkeypatch, caplog):
    monkeypatch.setattr(formatting, "textile", None)
    with caplog.at_level(logging.WARNING, logger="textslug.text.formatting"):
        assert to_html("h1. Title") == "h1. Title"
    assert "renderer" in caplog.text
