from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from pydantic import BaseModel

GENERAL_CATEGORY = "General"


class CodeFormat(StrEnum):
    HTML = "html"
    NUNJUCKS = "nunjucks"
    ANGULAR = "angular"


class Component(BaseModel):
    """Single component link parsed from the documentation index."""

    name: str  # Display text exactly as it appears in the index
    key: str  # name.lower(); lookup key in Catalog.components
    url: str  # Detail page, absolute or relative to the index URL
    description: str
    category: str = GENERAL_CATEGORY

    # Inferred from the URL shape only, never verified against the page.
    has_html: bool = False
    has_nunjucks: bool = False
    has_angular: bool = False
    has_props: bool = False

    def supports(self, code_format: CodeFormat) -> bool:
        if code_format is CodeFormat.HTML:
            return self.has_html
        if code_format is CodeFormat.NUNJUCKS:
            return self.has_nunjucks
        return self.has_angular


class Category(BaseModel):
    name: str
    description: str  # Synthesised from the heading, not read from the index
    components: list[Component] = []


@dataclass
class Catalog:
    """In-memory indexes built from the documentation index in a single pass."""

    # category name → category, in document order
    categories: dict[str, Category] = field(default_factory=dict)

    # component key → component; the first occurrence of a key wins
    components: dict[str, Component] = field(default_factory=dict)

    # normalised key → component key  e.g. "boton" → "botón"
    by_normalised: dict[str, str] = field(default_factory=dict)

    # normalised base name → keys carrying a format suffix
    # e.g. "boton" → ["botón (angular)"]
    suffixed: dict[str, list[str]] = field(default_factory=dict)


@dataclass(frozen=True)
class ExampleBlock:
    """One titled example from a component page with its code per format."""

    title: str
    html: str | None = None
    nunjucks: str | None = None
    angular: str | None = None

    @property
    def has_code(self) -> bool:
        return any((self.html, self.nunjucks, self.angular))

    def code_for(self, code_format: CodeFormat) -> str | None:
        return getattr(self, code_format.value)
