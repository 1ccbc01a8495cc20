"""
Rich-text (Textile) rendering to HTML.
"""
import logging
import re
from typing import Callable, Optional

try:
    # Optional renderer, installed with the "textile" extra
    import textile
except ImportError:
    textile = None

logger = logging.getLogger(__name__)

Renderer = Callable[[str], str]

_SINGLE_PARAGRAPH_RE = re.compile(r"\A\s*<p>(.*?)</p>\s*\Z", re.DOTALL)


def _strip_paragraph(html: str) -> str:
    m = _SINGLE_PARAGRAPH_RE.match(html)
    if m is None or "<p>" in m.group(1):
        return html
    return m.group(1)


def default_renderer() -> Optional[Renderer]:
    if textile is None:
        return None
    return textile.textile


def to_html(text: str, lite_mode: bool = False, renderer: Optional[Renderer] = None) -> str:
    """
    Render Textile markup to HTML.
    - lite_mode drops the wrapping <p>, handy for heading text
    - otherwise tabs are removed, and blank lines too unless the text has a <pre> block
    - with no renderer available, logs a warning and returns text unchanged
    """
    render = renderer or default_renderer()
    if render is None:
        logger.warning("to_html called without a Textile renderer; install textslug[textile]")
        return text
    html = render(text)
    if lite_mode:
        return _strip_paragraph(html.strip())
    html = html.replace("\t", "")
    if "<pre>" not in text:
        html = html.replace("\n\n", "")
    return html
