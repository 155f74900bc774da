"""Parser for the DESY ``llms.txt`` documentation index.

Single-pass state machine: every line is classified, and the only state
carried between lines is the current category. Lines that cannot be
classified or whose link cannot be parsed are skipped, so parsing never
fails part-way through a document.
"""

from __future__ import annotations

import re
from enum import Enum, auto

from desymcp.models.catalog import GENERAL_CATEGORY, Catalog, Category, Component
from desymcp.text import normalise

COMPONENT_PATH_MARKER = "/componente-"

_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)\s]+)\)(?:\s*[:\-–]\s*(.+))?")
_SUFFIX_RE = re.compile(r"^(?P<base>.+?)\s*\((?P<suffix>[^()]+)\)$")


class LineKind(Enum):
    BLANK = auto()
    CATEGORY = auto()  # "## Heading"
    SUBCATEGORY = auto()  # "### Heading"
    BULLET = auto()  # "- item", including indented continuation bullets
    OTHER = auto()


def classify_line(line: str) -> tuple[LineKind, str]:
    """Return the kind of ``line`` and its payload with the marker removed."""
    stripped = line.strip()
    if not stripped:
        return LineKind.BLANK, ""
    if stripped.startswith("## "):
        return LineKind.CATEGORY, stripped[3:].strip()
    if stripped.startswith("### "):
        return LineKind.SUBCATEGORY, stripped[4:].strip()
    if stripped.startswith("- "):
        return LineKind.BULLET, stripped[2:].strip()
    return LineKind.OTHER, stripped


def parse_index(content: str) -> Catalog:
    """Build a Catalog from the raw index text.

    Components are links under a bullet whose URL contains ``/componente-``.
    Each one belongs to the category heading that precedes it; links found
    before any heading fall under ``"General"``, which is not registered as
    a category.
    """
    catalog = Catalog()
    current_category: str | None = None

    for line in content.splitlines():
        kind, payload = classify_line(line)

        if kind is LineKind.CATEGORY and payload:
            current_category = payload
            if payload not in catalog.categories:
                catalog.categories[payload] = Category(
                    name=payload,
                    description=f"Documentation for {payload.lower()}",
                )
        elif kind is LineKind.SUBCATEGORY and payload:
            current_category = payload
            if payload not in catalog.categories:
                catalog.categories[payload] = Category(
                    name=payload,
                    description=f"{payload} components",
                )
        elif kind is LineKind.BULLET:
            component = _parse_component(payload, current_category)
            if component is not None:
                _add_component(catalog, component, current_category)

    return catalog


def _parse_component(payload: str, category: str | None) -> Component | None:
    match = _LINK_RE.search(payload)
    if match is None:
        return None

    name = match.group(1).strip()
    url = match.group(2).strip()
    if not name or COMPONENT_PATH_MARKER not in url:
        return None

    lowered_url = url.lower()
    trailing = (match.group(3) or "").strip()

    return Component(
        name=name,
        key=name.lower(),
        url=url,
        description=trailing or name,
        category=category or GENERAL_CATEGORY,
        has_html="-codigo" in lowered_url and "angular" not in lowered_url,
        has_nunjucks="nunjucks" in lowered_url,
        has_angular="angular" in lowered_url,
        has_props="propiedades" in lowered_url or "props" in lowered_url,
    )


def _add_component(catalog: Catalog, component: Component, category: str | None) -> None:
    if category is not None:
        catalog.categories[category].components.append(component)

    if component.key in catalog.components:
        return

    catalog.components[component.key] = component
    catalog.by_normalised.setdefault(normalise(component.key), component.key)

    suffix_match = _SUFFIX_RE.match(component.key)
    if suffix_match is not None:
        base = normalise(suffix_match.group("base"))
        catalog.suffixed.setdefault(base, []).append(component.key)


def split_format_suffix(key: str) -> tuple[str, str | None]:
    """Split ``"botón (angular)"`` into ``("botón", "angular")``."""
    match = _SUFFIX_RE.match(key)
    if match is None:
        return key, None
    return match.group("base"), match.group("suffix").strip()
