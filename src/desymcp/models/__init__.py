from __future__ import annotations

from desymcp.models.cache import CatalogSnapshot
from desymcp.models.catalog import (
    GENERAL_CATEGORY,
    Catalog,
    Category,
    CodeFormat,
    Component,
    ExampleBlock,
)
from desymcp.models.tools import (
    AvailableFormats,
    ComponentCodeInput,
    ComponentNotFoundOutput,
    ComponentPropsInput,
    ComponentPropsOutput,
    ComponentSummary,
    GetGuidelineInput,
    RefreshCacheOutput,
    SearchComponentsInput,
    SearchComponentsOutput,
)

__all__ = [
    # catalog
    "GENERAL_CATEGORY",
    "Catalog",
    "Category",
    "CodeFormat",
    "Component",
    "ExampleBlock",
    # cache
    "CatalogSnapshot",
    # tools
    "AvailableFormats",
    "ComponentCodeInput",
    "ComponentNotFoundOutput",
    "ComponentPropsInput",
    "ComponentPropsOutput",
    "ComponentSummary",
    "GetGuidelineInput",
    "RefreshCacheOutput",
    "SearchComponentsInput",
    "SearchComponentsOutput",
]
