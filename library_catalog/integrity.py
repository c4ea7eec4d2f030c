from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Sequence


@dataclass(frozen=True)
class DeleteCheck:
    allowed: bool
    blocking_records: List[Any] = field(default_factory=list)


IntegrityRule = Callable[[Any, Sequence[Any]], DeleteCheck]


def blocked_by_dependents(entity, related_records: Sequence) -> DeleteCheck:
    """Deletion is refused while any record still references the entity."""
    blocking = list(related_records)
    return DeleteCheck(allowed=not blocking, blocking_records=blocking)


def always_deletable(entity, related_records: Sequence) -> DeleteCheck:
    return DeleteCheck(allowed=True)


RULES: Dict[str, IntegrityRule] = {
    'author': blocked_by_dependents,
    'genre': blocked_by_dependents,
    'book': always_deletable,
    'bookinstance': always_deletable,
}


def can_delete(entity_type: str, entity, related_records: Sequence) -> DeleteCheck:
    return RULES[entity_type](entity, related_records)
