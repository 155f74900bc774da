from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, field_validator

from desymcp.models.catalog import CodeFormat, Component

_MAX_NAME_LENGTH = 200


def _require_text(value: str, field_name: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError(f"{field_name} must not be empty")
    if len(value) > _MAX_NAME_LENGTH:
        raise ValueError(f"{field_name} must be at most {_MAX_NAME_LENGTH} characters")
    return value


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


class ComponentCodeInput(BaseModel):
    component: str
    code_format: CodeFormat
    variant: str | None = None

    @field_validator("component")
    @classmethod
    def validate_component(cls, v: str) -> str:
        return _require_text(v, "component")

    @field_validator("variant")
    @classmethod
    def validate_variant(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        if len(v) > _MAX_NAME_LENGTH:
            raise ValueError(f"variant must be at most {_MAX_NAME_LENGTH} characters")
        return v or None


class ComponentPropsInput(BaseModel):
    component: str

    @field_validator("component")
    @classmethod
    def validate_component(cls, v: str) -> str:
        return _require_text(v, "component")


class SearchComponentsInput(BaseModel):
    query: str = ""

    @field_validator("query")
    @classmethod
    def validate_query(cls, v: str) -> str:
        v = v.strip()
        if len(v) > _MAX_NAME_LENGTH:
            raise ValueError(f"query must be at most {_MAX_NAME_LENGTH} characters")
        return v


class GetGuidelineInput(BaseModel):
    section: str

    @field_validator("section")
    @classmethod
    def validate_section(cls, v: str) -> str:
        return _require_text(v, "section")


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------


class ComponentSummary(BaseModel):
    name: str
    key: str
    description: str
    category: str
    url: str
    has_html: bool
    has_nunjucks: bool
    has_angular: bool
    has_props: bool

    @classmethod
    def from_component(cls, component: Component) -> ComponentSummary:
        return cls(**component.model_dump(include=set(cls.model_fields)))


class SearchComponentsOutput(BaseModel):
    query: str
    total: int
    truncated: bool
    matches: list[ComponentSummary]


class AvailableFormats(BaseModel):
    html: bool
    nunjucks: bool
    angular: bool


class ComponentPropsOutput(BaseModel):
    component: str
    description: str
    category: str
    url: str
    matched_via: str  # "exact" | "alias" | "substring"
    properties: list[dict[str, str]] | None = None
    content: str | None = None  # Raw props page, when it could be fetched
    available_formats: AvailableFormats | None = None
    note: str | None = None


class ComponentNotFoundOutput(BaseModel):
    error: str
    suggestions: list[str]
    available: list[str]


class RefreshCacheOutput(BaseModel):
    status: Literal["success", "error"]
    message: str
    categories: int
    components: int
    fetched_at: datetime | None
