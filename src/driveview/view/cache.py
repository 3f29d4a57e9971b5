"""In-memory listing for the active view."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from driveview.api.protocol import DriveApi, Scope
from driveview.errors import DriveViewError, InvalidStateError
from driveview.models import Entry

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PendingRemoval:
    """Rows hidden ahead of a delete/trash response (first phase of the commit)."""

    generation: int
    removed: list[tuple[int, Entry]] = field(default_factory=list)

    @property
    def ids(self) -> list[str]:
        return [entry.id for _, entry in self.removed]


class ItemCache:
    """
    Entries of the current scope, replaced wholesale on every load.

    A generation counter tags each load; a response that arrives after a
    newer load started is dropped, whether it succeeded or failed.
    """

    def __init__(self, api: DriveApi) -> None:
        self._api = api
        self._scope: Optional[Scope] = None
        self._items: list[Entry] = []
        self._by_id: dict[str, Entry] = {}
        self._generation = 0
        self._loaded_generation = 0

    @property
    def scope(self) -> Optional[Scope]:
        return self._scope

    @property
    def items(self) -> list[Entry]:
        return list(self._items)

    @property
    def generation(self) -> int:
        """Generation of the listing currently held."""
        return self._loaded_generation

    def get(self, entry_id: str) -> Optional[Entry]:
        return self._by_id.get(entry_id)

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._by_id

    def __len__(self) -> int:
        return len(self._items)

    async def load(self, scope: Scope) -> bool:
        """
        Fetch the listing for scope and replace the held items.

        Returns False if the response was stale and discarded. `scope` only
        becomes the active scope once its listing is installed.

        Raises:
            DriveViewError: if the current (non-stale) request fails; the held
                items are left untouched.
        """
        self._generation += 1
        gen = self._generation
        logger.debug("Loading %s (generation %d)", scope, gen)

        try:
            items = await self._api.list_entries(scope)
        except DriveViewError:
            if gen != self._generation:
                logger.warning("Ignoring failure of stale listing for %s", scope)
                return False
            raise

        if gen != self._generation:
            logger.warning("Discarding stale listing for %s (generation %d)", scope, gen)
            return False

        self._scope = scope
        self._install(items)
        self._loaded_generation = gen
        return True

    async def refresh(self) -> bool:
        if self._scope is None:
            raise InvalidStateError("Nothing loaded yet. Call load() first.")
        return await self.load(self._scope)

    def remove_tentative(self, entry_ids: Iterable[str]) -> PendingRemoval:
        """Hide rows immediately; keep what is needed to put them back."""
        wanted = set(entry_ids)
        pending = PendingRemoval(generation=self._loaded_generation)
        kept: list[Entry] = []
        for i, entry in enumerate(self._items):
            if entry.id in wanted:
                pending.removed.append((i, entry))
            else:
                kept.append(entry)
        self._install(kept)
        return pending

    def rollback(self, pending: PendingRemoval) -> None:
        """Undo a tentative removal, unless a newer listing has replaced it."""
        if pending.generation != self._loaded_generation:
            return
        items = list(self._items)
        for index, entry in pending.removed:
            if entry.id not in self._by_id:
                items.insert(min(index, len(items)), entry)
        self._install(items)

    def _install(self, items: Iterable[Entry]) -> None:
        by_id: dict[str, Entry] = {}
        ordered: list[Entry] = []
        for entry in items:
            if entry.id in by_id:
                logger.warning("Duplicate entry id %s in listing; keeping the first", entry.id)
                continue
            by_id[entry.id] = entry
            ordered.append(entry)
        self._items = ordered
        self._by_id = by_id
