from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from desymcp.models.catalog import Catalog


@dataclass(frozen=True)
class CatalogSnapshot:
    """The parsed catalog together with the raw index it was built from."""

    catalog: Catalog
    content: str  # Raw llms.txt markdown
    fetched_at: datetime
    expires_at: datetime

    @property
    def stale(self) -> bool:
        return datetime.now(UTC) > self.expires_at
