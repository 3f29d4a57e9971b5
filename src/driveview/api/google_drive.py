"""Google Drive v3 implementation of the collaborator API (synchronous)."""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Callable, Optional, Sequence, TypeVar

import httplib2
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaFileUpload

from driveview.auth import AuthInfo, OAuthClient
from driveview.config import DRIVE_FULL_SCOPE
from driveview.errors import (
    ApiError,
    DriveViewError,
    HttpErrorInfo,
    InvalidArgumentError,
    LocalPreconditionError,
    NetworkError,
    map_http_error,
)
from driveview.models import BatchResult, Entry, EntryKind, OperationResult
from driveview.util.mime import FOLDER_MIME, is_folder
from driveview.util.time import parse_optional_rfc3339

from .fields import FILE_FIELDS, LIST_FIELDS
from .protocol import ProgressCallback, Scope

T = TypeVar("T")

logger = logging.getLogger(__name__)

ROOT_ALIAS: str = "root"


class GoogleDriveApi:
    """
    Drive API collaborator.

    Notes:
        - The Drive `service` object is NOT exposed.
        - `supports_all_drives` is applied to all requests consistently.
        - Calls are never retried; each failure is mapped once and raised.
        - The real root folder id is resolved once and reported as parent_id=None.
    """

    DEFAULT_SCOPES: tuple[str, ...] = (DRIVE_FULL_SCOPE,)

    def __init__(self, service: Any, *, supports_all_drives: bool = True) -> None:
        self._service = service
        self._supports_all_drives = supports_all_drives
        self._root_id: Optional[str] = None

    @classmethod
    def from_auth(
        cls,
        auth_info: AuthInfo,
        *,
        scopes: Optional[Sequence[str]] = None,
        supports_all_drives: bool = True,
    ) -> GoogleDriveApi:
        use_scopes = list(scopes) if scopes is not None else list(cls.DEFAULT_SCOPES)
        service = OAuthClient(auth_info).build_drive_service(use_scopes, ensure_valid=True)
        return cls(service, supports_all_drives=supports_all_drives)

    # ----------------------------
    # Reads
    # ----------------------------
    def list_entries(self, scope: Scope) -> list[Entry]:
        q = build_scope_query(scope)
        root_id = self.root_id()
        return [_file_dict_to_entry(f, root_id) for f in self._find_by_query(q)]

    def get_entry_meta(self, entry_id: str) -> Entry:
        req = self._service.files().get(
            fileId=entry_id,
            fields=FILE_FIELDS,
            **self._common_kwargs(),
        )
        data = self._execute(req.execute)
        return _file_dict_to_entry(data, self.root_id())

    def root_id(self) -> str:
        if self._root_id is None:
            req = self._service.files().get(fileId=ROOT_ALIAS, fields="id")
            data = self._execute(req.execute)
            self._root_id = str(data.get("id") or ROOT_ALIAS)
            logger.debug("Resolved Drive root id %s", self._root_id)
        return self._root_id

    # ----------------------------
    # Mutations
    # ----------------------------
    def create_folder(self, name: str, parent_id: Optional[str]) -> Entry:
        body = {
            "name": name,
            "mimeType": FOLDER_MIME,
            "parents": [parent_id or self.root_id()],
        }
        req = self._service.files().create(body=body, fields=FILE_FIELDS, **self._common_kwargs())
        data = self._execute(req.execute)
        return _file_dict_to_entry(data, self.root_id())

    def rename_entry(self, entry_id: str, new_name: str) -> Entry:
        req = self._service.files().update(
            fileId=entry_id,
            body={"name": new_name},
            fields=FILE_FIELDS,
            **self._common_kwargs(),
        )
        data = self._execute(req.execute)
        return _file_dict_to_entry(data, self.root_id())

    def move_entry(self, entry_id: str, new_parent_id: Optional[str]) -> None:
        """Replace all parents with new_parent_id (None = root)."""
        current = self._service.files().get(
            fileId=entry_id,
            fields="parents",
            **self._common_kwargs(),
        )
        current_data = self._execute(current.execute)
        old_parents = current_data.get("parents", []) or []

        req = self._service.files().update(
            fileId=entry_id,
            addParents=new_parent_id or self.root_id(),
            removeParents=",".join(old_parents) or None,
            fields="id",
            **self._common_kwargs(),
        )
        self._execute(req.execute)

    def star_entry(self, entry_id: str, starred: bool = True) -> None:
        self._update_flags(entry_id, {"starred": starred})

    def bulk_star(self, entry_ids: Sequence[str], starred: bool = True) -> BatchResult:
        action = "star" if starred else "unstar"
        return self._run_batch(action, entry_ids, lambda i: self.star_entry(i, starred))

    def trash_entry(self, entry_id: str) -> None:
        self._update_flags(entry_id, {"trashed": True})

    def restore_entry(self, entry_id: str) -> None:
        self._update_flags(entry_id, {"trashed": False})

    def delete_forever(self, entry_id: str) -> None:
        req = self._service.files().delete(fileId=entry_id, **self._common_kwargs())
        self._execute(req.execute)

    def bulk_delete_forever(self, entry_ids: Sequence[str]) -> BatchResult:
        return self._run_batch("delete", entry_ids, self.delete_forever)

    def empty_trash(self) -> None:
        req = self._service.files().emptyTrash()
        self._execute(req.execute)

    def upload_file(
        self,
        path: str,
        parent_id: Optional[str],
        on_progress: Optional[ProgressCallback] = None,
    ) -> Entry:
        """Resumable upload; on_progress receives whole percentages."""
        if not path or not isinstance(path, str):
            raise InvalidArgumentError("path must be a non-empty string")

        try:
            media = MediaFileUpload(path, resumable=True)
        except OSError as exc:
            raise LocalPreconditionError(
                "Cannot read file for upload",
                details={"path": path},
                cause=exc,
            ) from exc
        body = {"name": os.path.basename(path), "parents": [parent_id or self.root_id()]}
        req = self._service.files().create(
            body=body,
            media_body=media,
            fields=FILE_FIELDS,
            **self._common_kwargs(),
        )

        response = None
        while response is None:
            status, response = self._execute(req.next_chunk)
            if status is not None and on_progress is not None:
                on_progress(int(status.progress() * 100))

        if on_progress is not None:
            on_progress(100)
        return _file_dict_to_entry(response, self.root_id())

    # ----------------------------
    # Internals
    # ----------------------------
    def _common_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True}

    def _common_list_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True, "includeItemsFromAllDrives": True}

    def _update_flags(self, entry_id: str, body: dict[str, Any]) -> None:
        req = self._service.files().update(
            fileId=entry_id,
            body=body,
            fields="id",
            **self._common_kwargs(),
        )
        self._execute(req.execute)

    def _run_batch(
        self,
        action: str,
        entry_ids: Sequence[str],
        func: Callable[[str], None],
    ) -> BatchResult:
        batch = BatchResult(action=action)
        for entry_id in entry_ids:
            try:
                func(entry_id)
                batch.results.append(OperationResult(entry_id, action, "success"))
            except DriveViewError as exc:
                logger.warning("%s failed for %s: %s", action, entry_id, exc)
                batch.results.append(_failed_result(entry_id, action, exc))
        return batch

    def _find_by_query(self, q: str) -> list[dict[str, Any]]:
        all_files: list[dict[str, Any]] = []
        page_token: Optional[str] = None

        while True:
            req = self._service.files().list(
                q=q,
                fields=LIST_FIELDS,
                pageToken=page_token,
                **self._common_list_kwargs(),
            )
            data = self._execute(req.execute)
            all_files.extend(data.get("files", []))

            page_token = data.get("nextPageToken")
            if not page_token:
                break

        return all_files

    def _execute(self, func: Callable[[], T]) -> T:
        try:
            return func()
        except Exception as exc:
            raise _map_exception(exc) from exc


def build_scope_query(scope: Scope) -> str:
    """Translate a listing scope into a Drive `q` expression."""
    if scope.kind == "folder":
        parent = scope.folder_id or ROOT_ALIAS
        return f"'{_escape_query(parent)}' in parents and trashed=false"
    if scope.kind == "starred":
        return "starred=true and trashed=false"
    if scope.kind == "trash":
        return "trashed=true"
    if scope.kind == "search":
        return f"name contains '{_escape_query(scope.query.strip())}' and trashed=false"
    raise InvalidArgumentError("Unknown scope kind", details={"kind": scope.kind})


def _escape_query(value: str) -> str:
    return value.replace("\\", "\\\\").replace("'", "\\'")


def _map_exception(exc: Exception) -> DriveViewError:
    if isinstance(exc, DriveViewError):
        return exc
    if isinstance(exc, HttpError):
        return map_http_error(_http_error_to_info(exc), cause=exc)
    if isinstance(exc, (httplib2.HttpLib2Error, OSError, TimeoutError)):
        return NetworkError(
            "Unable to connect to the server. Please check your internet connection.",
            cause=exc,
        )
    return ApiError("Drive API error", cause=exc)


def _failed_result(entry_id: str, action: str, exc: DriveViewError) -> OperationResult:
    return OperationResult(
        entry_id=entry_id,
        action=action,
        status="failed",
        error_type=exc.__class__.__name__,
        error_message=str(exc),
        error_details=exc.details or None,
    )


def _file_dict_to_entry(data: dict[str, Any], root_id: Optional[str] = None) -> Entry:
    file_id = data.get("id")
    name = data.get("name", "")
    mime_type = data.get("mimeType", "")
    parents = data.get("parents", []) or []

    parent_id: Optional[str] = None
    if isinstance(parents, list) and parents and isinstance(parents[0], str):
        parent_id = parents[0]
    if parent_id is not None and parent_id in (root_id, ROOT_ALIAS):
        parent_id = None

    folder = is_folder(mime_type)

    size = None
    if not folder:
        if isinstance(data.get("size"), str) and data["size"].isdigit():
            size = int(data["size"])
        elif isinstance(data.get("size"), int):
            size = data["size"]

    created_at = parse_optional_rfc3339(data.get("createdTime"))
    return Entry(
        id=file_id if isinstance(file_id, str) else "",
        name=name if isinstance(name, str) else "",
        kind=EntryKind.FOLDER if folder else EntryKind.FILE,
        parent_id=parent_id,
        created_at=created_at,
        updated_at=parse_optional_rfc3339(data.get("modifiedTime")) or created_at,
        size=size,
        mime_type=None if folder or not isinstance(mime_type, str) or not mime_type else mime_type,
        is_starred=bool(data.get("starred", False)),
        is_trashed=bool(data.get("trashed", False)),
        trashed_at=parse_optional_rfc3339(data.get("trashedTime")),
    )


def _http_error_to_info(exc: Any) -> HttpErrorInfo:
    status_code = getattr(getattr(exc, "resp", None), "status", None)
    reason = getattr(getattr(exc, "resp", None), "reason", None)

    message = None
    details: dict[str, Any] = {}

    content = getattr(exc, "content", None)
    if isinstance(content, (bytes, bytearray)):
        try:
            payload = json.loads(content.decode("utf-8"))
        except (UnicodeDecodeError, ValueError):
            payload = {}
        err = payload.get("error", {}) if isinstance(payload, dict) else {}
        if isinstance(err, dict):
            message = err.get("message") or None
            errors = err.get("errors") or []
            if errors and isinstance(errors, list) and isinstance(errors[0], dict):
                details["domain"] = errors[0].get("domain")
                details["reason_detail"] = errors[0].get("reason")
                if isinstance(errors[0].get("reason"), str):
                    reason = errors[0]["reason"]

    if not isinstance(status_code, int):
        status_code = 0

    return HttpErrorInfo(
        status_code=status_code,
        reason=reason if isinstance(reason, str) else None,
        message=message,
        details=details or None,
    )
