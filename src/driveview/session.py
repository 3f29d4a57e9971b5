"""Session: the explicit auth/config context handed to the view layer."""

from __future__ import annotations

import logging
from typing import Any, Optional

from driveview.api import AsyncDriveApi, GoogleDriveApi
from driveview.auth import AuthInfo, OAuthClient
from driveview.config import ClientConfig
from driveview.errors import InvalidStateError

logger = logging.getLogger(__name__)


class Session:
    """
    Owns credentials and the collaborator API for one signed-in user.

    Lifecycle: open() at startup (runs the OAuth flow if needed), close() on
    logout. Nothing is held in module globals; components receive the session
    (or its `api` / `config`) explicitly.
    """

    def __init__(
        self,
        auth_info: Optional[AuthInfo] = None,
        config: Optional[ClientConfig] = None,
        *,
        backend: Any = None,
    ) -> None:
        self._auth_info = auth_info
        self._config = config or ClientConfig()
        self._api: Optional[AsyncDriveApi] = AsyncDriveApi(backend) if backend is not None else None

    @classmethod
    def from_backend(cls, backend: Any, config: Optional[ClientConfig] = None) -> Session:
        """Create an already-open session around a pre-built backend (useful for tests)."""
        return cls(None, config, backend=backend)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def is_open(self) -> bool:
        return self._api is not None

    @property
    def api(self) -> AsyncDriveApi:
        if self._api is None:
            raise InvalidStateError("Session is not open. Call open() first.")
        return self._api

    def open(self) -> AsyncDriveApi:
        if self._api is not None:
            return self._api
        if self._auth_info is None:
            raise InvalidStateError("Session has no AuthInfo to open with.")

        backend = GoogleDriveApi.from_auth(
            self._auth_info,
            scopes=self._config.scopes,
            supports_all_drives=self._config.supports_all_drives,
        )
        self._api = AsyncDriveApi(backend)
        logger.info("Session opened")
        return self._api

    def close(self, *, forget_token: bool = False) -> None:
        """Log out: drop the collaborator, optionally removing the stored token."""
        self._api = None
        if forget_token and self._auth_info is not None:
            OAuthClient(self._auth_info).forget_token()
        logger.info("Session closed")

    def __enter__(self) -> Session:
        self.open()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
