"""Results handed from use cases to the CLI."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class OrderDTO:
    """Output: an order as displayed to the user."""

    id: int
    status: str
    total: str
    customer_email: str
    items: list[str]
    actions: list[str]
    created_at: str


@dataclass
class ImportReport:
    """Output: what a catalog import did."""

    imported: int = 0
    skipped: int = 0
    failed: int = 0
    messages: list[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.failed == 0
