"""Identity resolution - decides whether a save is an insert or an update"""

import re
from dataclasses import dataclass
from typing import Optional, Union

PERSISTED_ID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class PersistedId:
    """Identifier assigned by the store on first insert"""

    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PendingId:
    """Marker for a record that has not been stored yet.

    ``client_token`` keeps whatever placeholder the caller used (e.g.
    ``"L-1718000000000"``) for logging only. It is never sent to the store.
    """

    client_token: str = ""


RecordId = Union[PersistedId, PendingId]


def is_persisted_identifier(raw: Optional[str]) -> bool:
    """Return True if ``raw`` has the canonical 8-4-4-4-12 hex shape"""
    return bool(raw) and PERSISTED_ID_PATTERN.fullmatch(raw) is not None


def classify_identifier(raw: Optional[str]) -> RecordId:
    """
    Classify a caller-supplied identifier.

    Examples:
        "550e8400-e29b-41d4-a716-446655440000" -> PersistedId (update path)
        "L-1718000000000" -> PendingId (insert path)
        "" or None -> PendingId (insert path)
    """
    if is_persisted_identifier(raw):
        return PersistedId(raw)
    return PendingId(raw or "")
