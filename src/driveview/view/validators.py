"""Local precondition checks run before any request is sent."""

from __future__ import annotations

from typing import Callable, Optional

from driveview.errors import LocalPreconditionError

# Returns (known, parent_id) for an id: known=False means the link must be fetched.
ParentLookup = Callable[[str], tuple[bool, Optional[str]]]


def validate_name(name: str, what: str = "Name") -> str:
    """Return the trimmed name; reject blank names."""
    trimmed = (name or "").strip()
    if not trimmed:
        raise LocalPreconditionError(f"{what} must not be empty")
    return trimmed


def validate_not_self_drop(entry_id: str, new_parent_id: Optional[str]) -> None:
    if new_parent_id is not None and entry_id == new_parent_id:
        raise LocalPreconditionError("Cannot move an item into itself")


def validate_not_noop_move(current_parent_id: Optional[str], new_parent_id: Optional[str]) -> None:
    if current_parent_id == new_parent_id:
        where = "the root" if new_parent_id is None else "that folder"
        raise LocalPreconditionError(f"Item is already in {where}")


def find_cycle(
    entry_id: str,
    new_parent_id: Optional[str],
    lookup: ParentLookup,
    *,
    max_hops: int,
) -> tuple[bool, Optional[str]]:
    """
    Walk from new_parent towards the root using known parent links only.

    Returns:
        (True, None) if entry_id is on the chain (the move would be cyclic).
        (False, None) if the root was reached without meeting entry_id.
        (False, unknown_id) if the walk stopped at an id whose parent is unknown.

    Raises:
        LocalPreconditionError: if the chain is longer than max_hops or loops.
    """
    current = new_parent_id
    visited: set[str] = set()
    hops = 0

    while current is not None:
        if current == entry_id:
            return True, None
        if current in visited or hops >= max_hops:
            raise LocalPreconditionError(
                "Cannot verify destination folder ancestry",
                details={"entry_id": entry_id, "new_parent_id": new_parent_id},
            )
        visited.add(current)

        known, parent = lookup(current)
        if not known:
            return False, current
        current = parent
        hops += 1

    return False, None
