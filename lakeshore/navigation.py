"""Site navigation shared by the desktop and mobile menus."""
from __future__ import annotations

import logging
from contextlib import ExitStack
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Protocol, Tuple

from .models import NavItem

logger = logging.getLogger(__name__)

NAV_ITEMS: Tuple[NavItem, ...] = (
    NavItem(label="Home", href="/"),
    NavItem(label="Our Cats", href="/cats"),
    NavItem(label="Available Kittens", href="/kittens"),
    NavItem(label="Gallery", href="/gallery"),
    NavItem(label="Blog", href="/blog"),
    NavItem(label="FAQ", href="/faq"),
    NavItem(label="About", href="/about"),
    NavItem(label="Contact", href="/contact"),
)

WAITLIST_CTA = NavItem(label="Join Waitlist", href="/waitlist")

ESCAPE_KEY = "Escape"


def is_active_path(current_path: str, href: str) -> bool:
    """Match exactly, or by prefix for any entry other than the home page."""

    return current_path == href or (href != "/" and current_path.startswith(href))


KeyListener = Callable[[str], None]


class Document(Protocol):
    """The page-level hooks the mobile menu needs while it is open."""

    def lock_scroll(self) -> None:
        ...

    def unlock_scroll(self) -> None:
        ...

    def add_key_listener(self, listener: KeyListener) -> None:
        ...

    def remove_key_listener(self, listener: KeyListener) -> None:
        ...


class MenuState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"


@dataclass(frozen=True)
class MenuLink:
    label: str
    href: str
    active: bool


class MobileMenu:
    """Two-state disclosure menu.

    Entering ``OPEN`` locks page scroll and registers an escape-key
    listener; both are undone, in reverse order, when the menu closes.
    """

    def __init__(
        self,
        document: Document,
        current_path: str = "/",
        items: Tuple[NavItem, ...] = NAV_ITEMS,
    ) -> None:
        self.document = document
        self.current_path = current_path
        self.items = items
        self._open_scope: Optional[ExitStack] = None

    @property
    def state(self) -> MenuState:
        return MenuState.OPEN if self._open_scope is not None else MenuState.CLOSED

    @property
    def is_open(self) -> bool:
        return self.state is MenuState.OPEN

    @property
    def toggle_label(self) -> str:
        return "Close menu" if self.is_open else "Open menu"

    def open(self) -> None:
        if self._open_scope is not None:
            return
        with ExitStack() as scope:
            self.document.lock_scroll()
            scope.callback(self.document.unlock_scroll)
            self.document.add_key_listener(self.handle_key)
            scope.callback(self.document.remove_key_listener, self.handle_key)
            self._open_scope = scope.pop_all()
        logger.debug("Mobile menu opened at %s", self.current_path)

    def close(self) -> None:
        scope, self._open_scope = self._open_scope, None
        if scope is None:
            return
        scope.close()
        logger.debug("Mobile menu closed")

    def toggle(self) -> None:
        if self.is_open:
            self.close()
        else:
            self.open()

    def handle_key(self, key: str) -> None:
        if key == ESCAPE_KEY:
            self.close()

    def click_backdrop(self) -> None:
        self.close()

    def click_link(self, href: str) -> str:
        """Close the menu and return the destination to navigate to."""

        self.close()
        return href

    def links(self) -> List[MenuLink]:
        return [
            MenuLink(label=item.label, href=item.href, active=is_active_path(self.current_path, item.href))
            for item in self.items
        ]
