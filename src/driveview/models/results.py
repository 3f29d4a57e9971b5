"""Result models for moves and batch operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Optional


OperationStatus = Literal["success", "failed"]
MoveStatus = Literal["moved", "rejected", "failed"]


@dataclass(slots=True)
class OperationResult:
    """Result for a single item of a (possibly batched) operation."""

    entry_id: str
    action: str
    status: OperationStatus

    error_type: Optional[str] = None
    error_message: Optional[str] = None
    error_details: Optional[dict[str, Any]] = None


@dataclass(slots=True)
class BatchResult:
    """Aggregate result for bulk operations. Items never abort each other."""

    action: str
    results: list[OperationResult] = field(default_factory=list)

    @property
    def succeeded(self) -> list[str]:
        return [r.entry_id for r in self.results if r.status == "success"]

    @property
    def failed(self) -> list[OperationResult]:
        return [r for r in self.results if r.status == "failed"]


@dataclass(slots=True, frozen=True)
class MoveResult:
    """Outcome of a drag-and-drop move."""

    status: MoveStatus
    entry_id: Optional[str] = None
    new_parent_id: Optional[str] = None
    reason: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def moved(self) -> bool:
        return self.status == "moved"
