"""Store-agnostic document DTOs shared by the Firestore and in-memory stores."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class DocumentSnapshot:
    """Snapshot of a document: id, full path (relative to the database root) and data."""

    id: str
    path: str
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return self.data


@dataclass(frozen=True)
class ContainerRef:
    """A collection to scan, optionally narrowed by one equality filter.

    The filter is how root-level collections from before tenant scoping are
    attributed to a tenant (``tenantId == <tenant>``).
    """

    path: str
    filter_field: str | None = None
    filter_value: Any = None

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    def matches(self, data: dict[str, Any]) -> bool:
        if self.filter_field is None:
            return True
        return data.get(self.filter_field) == self.filter_value
