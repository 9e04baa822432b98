"""
Page capabilities: the only way the pipeline touches a web page.

The Playwright backend lives in ``digest.browser.playwright_page`` and is
imported on demand.
"""

from .base import PageCapability, ElementSnapshot
from .html_page import HtmlPage

__all__ = ['PageCapability', 'ElementSnapshot', 'HtmlPage']
