"""Component resolution, suggestions and search.

Pure business logic: receives a Catalog, returns matches.
No knowledge of AppState, MCP, or I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from rapidfuzz import fuzz, process

from desymcp.aliases import COMPONENT_ALIASES, alias_group_for, alias_variants
from desymcp.parser import split_format_suffix
from desymcp.text import normalise

if TYPE_CHECKING:
    from desymcp.models.catalog import Catalog, CodeFormat, Component

MatchType = Literal["exact", "alias", "substring"]


@dataclass(frozen=True)
class ComponentMatch:
    """Result of resolve_component; ``matched_via`` tells how sure it is."""

    key: str
    component: Component
    matched_via: MatchType


def resolve_component(
    query: str,
    catalog: Catalog,
    *,
    format_hint: CodeFormat | None = None,
) -> ComponentMatch | None:
    """Resolve free text to a catalog key using the 5-step algorithm.

    Steps, first hit wins:
      1. Exact key (verbatim lower-case, or equal after normalisation)
      2. Query is a canonical alias key present in the catalog
      3. Query belongs to an alias group with a member in the catalog
      4. Substring in either direction against catalog keys
      5. No match
    """
    normalised = normalise(query)
    if not normalised:
        return None

    # Step 1: Exact key
    key = query.strip().lower()
    if key not in catalog.components:
        key = catalog.by_normalised.get(normalised)
    if key is not None:
        key = _prefer_format(key, catalog, format_hint)
        return _match(catalog, key, "exact")

    # Step 2: Canonical alias key
    if normalised in COMPONENT_ALIASES:
        key = _lookup_base(normalised, catalog, format_hint)
        if key is not None:
            return _match(catalog, key, "alias")

    # Step 3: Alias group membership
    canonical = alias_group_for(normalised)
    if canonical is not None:
        for variant in alias_variants(canonical):
            key = _lookup_base(
                normalise(variant), catalog, format_hint, prefer_suffixed=True
            )
            if key is not None:
                return _match(catalog, key, "alias")

    # Step 4: Substring
    for key in catalog.components:
        candidate = normalise(key)
        if candidate and (candidate in normalised or normalised in candidate):
            return _match(catalog, _prefer_format(key, catalog, format_hint), "substring")

    # Step 5: No match
    return None


def _match(catalog: Catalog, key: str, matched_via: MatchType) -> ComponentMatch:
    return ComponentMatch(key=key, component=catalog.components[key], matched_via=matched_via)


def _lookup_base(
    base: str,
    catalog: Catalog,
    format_hint: CodeFormat | None,
    *,
    prefer_suffixed: bool = False,
) -> str | None:
    """Find the catalog key for a normalised base name, honouring the hint.

    Preference: ``<base> (<hint>)``, then the plain key, then the first
    suffixed key. With ``prefer_suffixed`` and no hint, the first suffixed
    key comes before the plain one.
    """
    suffixed = catalog.suffixed.get(base, [])
    hinted = _find_suffix(suffixed, format_hint)
    if hinted is not None:
        return hinted
    if prefer_suffixed and format_hint is None and suffixed:
        return suffixed[0]
    plain = catalog.by_normalised.get(base)
    if plain is not None:
        return plain
    return suffixed[0] if suffixed else None


def _prefer_format(key: str, catalog: Catalog, format_hint: CodeFormat | None) -> str:
    """Swap a plain key for its ``(<hint>)`` sibling when one exists."""
    if format_hint is None:
        return key
    base, suffix = split_format_suffix(key)
    if suffix is not None and normalise(suffix) == format_hint.value:
        return key
    hinted = _find_suffix(catalog.suffixed.get(normalise(base), []), format_hint)
    return hinted or key


def _find_suffix(keys: list[str], format_hint: CodeFormat | None) -> str | None:
    if format_hint is None:
        return None
    for key in keys:
        _, suffix = split_format_suffix(key)
        if suffix is not None and normalise(suffix) == format_hint.value:
            return key
    return None


# ---------------------------------------------------------------------------
# Suggestions
# ---------------------------------------------------------------------------


def suggest_components(
    query: str,
    catalog: Catalog,
    *,
    limit: int = 5,
    score_cutoff: int = 60,
    min_length: int = 3,
) -> list[str]:
    """Return up to ``limit`` catalog keys that look like ``query``.

    Fuzzy matches (Levenshtein-based, via rapidfuzz) come first, followed by
    keys containing the query's first ``min_length`` characters. Queries
    shorter than ``min_length`` get no suggestions.
    """
    normalised = normalise(query)
    if limit <= 0 or len(normalised) < min_length:
        return []

    keys = list(catalog.components)
    choices = [normalise(key) for key in keys]

    suggestions: list[str] = []
    for _choice, _score, idx in process.extract(
        normalised,
        choices,
        scorer=fuzz.WRatio,
        limit=limit,
        score_cutoff=score_cutoff,
    ):
        suggestions.append(keys[idx])

    anchor = normalised[:min_length]
    for key, choice in zip(keys, choices, strict=True):
        if len(suggestions) >= limit:
            break
        if anchor in choice and key not in suggestions:
            suggestions.append(key)

    return suggestions[:limit]


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


def search_components(
    query: str,
    catalog: Catalog,
    *,
    max_results: int = 100,
) -> tuple[list[Component], int]:
    """Search components by key, name or description.

    Matching is normalised containment in both directions, and a query that
    belongs to an alias group also matches every variant of that group.
    An empty query matches everything. Returns the first ``max_results``
    matches in catalog order and the total number of matches.
    """
    terms = _search_terms(query)
    matches: list[Component] = []

    for key, component in catalog.components.items():
        if not terms or _component_matches(terms, key, component):
            matches.append(component)

    return matches[:max_results], len(matches)


def _search_terms(query: str) -> list[str]:
    normalised = normalise(query)
    if not normalised:
        return []
    terms = [normalised]
    canonical = alias_group_for(normalised)
    if canonical is not None:
        for variant in alias_variants(canonical):
            term = normalise(variant)
            if term not in terms:
                terms.append(term)
    return terms


def _component_matches(terms: list[str], key: str, component: Component) -> bool:
    haystacks = {normalise(key), normalise(component.name), normalise(component.description)}
    haystacks.discard("")
    return any(term in hay or hay in term for term in terms for hay in haystacks)
