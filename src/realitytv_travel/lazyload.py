"""Deferred card background images.

Cards carry their real image in ``data-bg``. The controller watches each
element through a visibility observer and swaps the image in the first
time the element comes within the root margin of the viewport, then
stops watching it. Without an observer every image loads immediately.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from bs4 import BeautifulSoup

from . import config

logger = logging.getLogger(__name__)


@dataclass
class LazyElement:
    element_id: str
    deferred_url: str
    top: float = 0.0
    height: float = 0.0
    background: str | None = None

    @property
    def loaded(self) -> bool:
        return self.background is not None


@dataclass(frozen=True)
class VisibilityEntry:
    element: LazyElement
    is_near: bool


EntriesCallback = Callable[[list[VisibilityEntry]], None]


class VisibilityObserver(ABC):
    @abstractmethod
    def observe(self, element: LazyElement) -> None:
        pass

    @abstractmethod
    def unobserve(self, element: LazyElement) -> None:
        pass


class ViewportObserver(VisibilityObserver):
    """Proximity test against a vertical viewport and a scroll offset."""

    def __init__(
        self,
        callback: EntriesCallback,
        *,
        viewport_height: float,
        root_margin: float | None = None,
    ) -> None:
        self.callback = callback
        self.viewport_height = viewport_height
        self.root_margin = config.LAZY_ROOT_MARGIN if root_margin is None else root_margin
        self.scroll_top = 0.0
        self.observed: dict[str, LazyElement] = {}

    def _is_near(self, element: LazyElement) -> bool:
        low = self.scroll_top - self.root_margin
        high = self.scroll_top + self.viewport_height + self.root_margin
        return element.top <= high and element.top + element.height >= low

    def observe(self, element: LazyElement) -> None:
        self.observed[element.element_id] = element
        self.callback([VisibilityEntry(element, self._is_near(element))])

    def unobserve(self, element: LazyElement) -> None:
        self.observed.pop(element.element_id, None)

    def scroll_to(self, scroll_top: float) -> None:
        self.scroll_top = scroll_top
        entries = [
            VisibilityEntry(element, self._is_near(element))
            for element in list(self.observed.values())
        ]
        if entries:
            self.callback(entries)


ObserverFactory = Callable[[EntriesCallback], VisibilityObserver]


class LazyLoadController:
    def __init__(self, observer_factory: ObserverFactory | None = None) -> None:
        self.observer = observer_factory(self._on_entries) if observer_factory else None
        if self.observer is None:
            logger.debug("No visibility observer; images load eagerly")

    def _load(self, element: LazyElement) -> None:
        if element.loaded:
            return
        element.background = f"url('{element.deferred_url}')"

    def _on_entries(self, entries: list[VisibilityEntry]) -> None:
        for entry in entries:
            if not entry.is_near:
                continue
            self._load(entry.element)
            if self.observer is not None:
                self.observer.unobserve(entry.element)

    def register(self, elements: Iterable[LazyElement]) -> None:
        for element in elements:
            if self.observer is None:
                self._load(element)
            else:
                self.observer.observe(element)


def elements_from_markup(markup: str, *, row_height: float = 400.0) -> list[LazyElement]:
    """One ``LazyElement`` per ``data-bg`` card, stacked ``row_height`` apart.

    The element id comes from the nearest ``data-id`` ancestor (or the
    element itself); anonymous images get a positional id.
    """
    soup = BeautifulSoup(markup, "html.parser")
    elements = []
    for index, tag in enumerate(soup.select("[data-bg]")):
        url = tag.get("data-bg")
        if not url:
            continue
        owner = tag if tag.has_attr("data-id") else tag.find_parent(attrs={"data-id": True})
        element_id = owner.get("data-id") if owner is not None else None
        elements.append(
            LazyElement(
                element_id or f"lazy-{index}",
                url,
                top=len(elements) * row_height,
                height=row_height,
            )
        )
    return elements
