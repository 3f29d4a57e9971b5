"""Breadcrumb path resolution by walking parent links."""

from __future__ import annotations

import logging
from typing import Optional

from driveview.api.protocol import DriveApi
from driveview.errors import DriveViewError
from driveview.models import Crumb

logger = logging.getLogger(__name__)

DEFAULT_MAX_HOPS: int = 25


class BreadcrumbResolver:
    """
    Build [root, ..., folder] crumbs one get_entry_meta() hop at a time.

    navigate() tags each resolution with a generation; only the newest one
    may replace `crumbs`. Parent links seen along the way are remembered in
    `parent_links` for other components (the mover's ancestor walk).
    """

    def __init__(
        self,
        api: DriveApi,
        *,
        root_label: str = "My Drive",
        max_hops: int = DEFAULT_MAX_HOPS,
    ) -> None:
        self._api = api
        self.root_label = root_label
        self.max_hops = max_hops
        self._generation = 0
        self._crumbs: list[Crumb] = self.root_crumbs()
        self.parent_links: dict[str, Optional[str]] = {}

    @property
    def crumbs(self) -> list[Crumb]:
        return list(self._crumbs)

    def root_crumbs(self) -> list[Crumb]:
        return [Crumb(id=None, name=self.root_label)]

    async def resolve(self, folder_id: Optional[str]) -> list[Crumb]:
        """
        Return the crumb path for folder_id.

        Fails safe to the root crumb alone when a hop fails, the chain loops,
        or the hop cap is exceeded.
        """
        if folder_id is None:
            return self.root_crumbs()

        chain: list[Crumb] = []
        seen: set[str] = set()
        current: Optional[str] = folder_id

        while current is not None:
            if len(chain) >= self.max_hops:
                logger.warning(
                    "Breadcrumb chain for %s exceeds %d hops; showing root only",
                    folder_id,
                    self.max_hops,
                )
                return self.root_crumbs()
            if current in seen:
                logger.warning("Cyclic parent chain at %s; showing root only", current)
                return self.root_crumbs()
            seen.add(current)

            try:
                entry = await self._api.get_entry_meta(current)
            except DriveViewError as exc:
                logger.warning("Breadcrumb hop for %s failed: %s", current, exc)
                return self.root_crumbs()

            self.parent_links[entry.id] = entry.parent_id
            chain.append(Crumb(id=entry.id, name=entry.name))
            current = entry.parent_id

        chain.reverse()
        return self.root_crumbs() + chain

    async def navigate(self, folder_id: Optional[str]) -> Optional[list[Crumb]]:
        """
        Resolve and install crumbs for folder_id.

        Returns the installed crumbs, or None if a newer navigate() started
        while this one was in flight (its result is discarded).
        """
        self._generation += 1
        gen = self._generation

        crumbs = await self.resolve(folder_id)

        if gen != self._generation:
            logger.warning("Discarding stale breadcrumbs for %s", folder_id)
            return None

        self._crumbs = crumbs
        return list(crumbs)

    def reset(self) -> None:
        """Show the root crumb alone and invalidate in-flight resolutions."""
        self.restore(self.root_crumbs())

    def restore(self, crumbs: list[Crumb]) -> None:
        """Put back a previously shown path (e.g. after a failed navigation)."""
        self._generation += 1
        self._crumbs = list(crumbs)

    def parent_crumb(self) -> Optional[Crumb]:
        """Crumb one level above the current folder, if any."""
        if len(self._crumbs) < 2:
            return None
        return self._crumbs[-2]
