"""Placeholder states rendered in place of a grid or detail body."""

from __future__ import annotations

from dataclasses import dataclass

from .rendering import render

KIND_LOAD_FAILED = "load-failed"
KIND_NOT_FOUND = "not-found"
KIND_NO_RESULTS = "no-results"
KIND_EMPTY = "empty"


@dataclass(frozen=True)
class StateView:
    kind: str
    message: str
    action_label: str | None = None
    action_href: str | None = None
    collection: str | None = None


def render_state(state: StateView) -> str:
    return render("state.html", state=state)


def load_failed(collection: str) -> str:
    """``collection`` is the plural noun, e.g. "shows"."""
    return render_state(
        StateView(
            KIND_LOAD_FAILED,
            f"Unable to load {collection}. Please try again.",
            action_label="Retry",
            action_href="#retry",
            collection=collection,
        )
    )


def not_found(kind: str, listing_href: str) -> str:
    """``kind`` is the singular noun, e.g. "Show"."""
    return render_state(
        StateView(
            KIND_NOT_FOUND,
            f"{kind} not found.",
            action_label=f"Browse all {kind.lower()}s",
            action_href=listing_href,
        )
    )


def no_results(query: str) -> str:
    if query:
        message = f'No results for "{query}". Try a different search or filter.'
    else:
        message = "No results match the selected filters."
    return render_state(StateView(KIND_NO_RESULTS, message))


def empty(message: str) -> str:
    return render_state(StateView(KIND_EMPTY, message))
