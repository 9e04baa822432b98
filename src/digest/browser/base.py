#!/usr/bin/env python3
"""
Base classes for page capabilities.

The scraping pipeline only ever talks to a page through this interface, so
it runs the same against a real browser and against static HTML.
"""

from abc import ABC, abstractmethod
from typing import List, Dict, Optional
from dataclasses import dataclass, field


@dataclass
class ElementSnapshot:
    """Plain-data copy of a DOM element taken at query time."""
    tag: str
    text: str = ""
    attrs: Dict[str, str] = field(default_factory=dict)
    next_sibling_text: Optional[str] = None
    raw_text: str = ""

    def get(self, name: str) -> Optional[str]:
        value = self.attrs.get(name)
        if value is None:
            return None
        return value.strip() or None


class PageCapability(ABC):
    """
    A single page/navigation context.

    Implementations hold exactly one current document; navigate() replaces it.
    """

    @abstractmethod
    def navigate(self, url: str) -> None:
        """
        Load url and wait for DOM readiness.

        Raises:
            NavigationError: If the page cannot be loaded in time
        """
        pass

    @abstractmethod
    def select(self, selector: str) -> List[ElementSnapshot]:
        """Return every element matching selector; empty when none match."""
        pass

    def select_one(self, selector: str) -> Optional[ElementSnapshot]:
        """Return the first element matching selector, or None."""
        matches = self.select(selector)
        return matches[0] if matches else None

    @abstractmethod
    def scroll_to_bottom(self, settle_ms: int) -> None:
        """Scroll to the end of the document and wait settle_ms."""
        pass

    @property
    @abstractmethod
    def current_url(self) -> Optional[str]:
        pass
