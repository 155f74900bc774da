"""Helpers shared by the component-oriented tool handlers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from desymcp.errors import DesyError, ErrorCode
from desymcp.resolver import suggest_components

if TYPE_CHECKING:
    from desymcp.config import SearchSettings
    from desymcp.models.catalog import Catalog


def invalid_input(exc: ValueError, suggestion: str) -> DesyError:
    """Wrap a pydantic validation failure in an INVALID_INPUT error."""
    return DesyError(
        code=ErrorCode.INVALID_INPUT,
        message=str(exc),
        suggestion=suggestion,
        recoverable=False,
    )


def not_found_hints(
    query: str,
    catalog: Catalog,
    settings: SearchSettings,
) -> tuple[list[str], list[str]]:
    """Return (suggestions, available keys), both bounded by settings."""
    suggestions = suggest_components(
        query,
        catalog,
        limit=settings.suggestion_limit,
        score_cutoff=settings.suggestion_score_cutoff,
        min_length=settings.suggestion_min_length,
    )
    available = list(catalog.components)[: settings.not_found_key_limit]
    return suggestions, available


def render_not_found(kind: str, query: str, suggestions: list[str], available: list[str]) -> str:
    """Plain-text not-found message for tools that return text."""
    lines = [f"{kind} '{query}' not found."]
    if suggestions:
        lines += ["", "Did you mean:", *(f"- {s}" for s in suggestions)]
    if available:
        lines += ["", f"Available {kind.lower()}s (first {len(available)}):"]
        lines += [f"- {a}" for a in available]
    return "\n".join(lines)
