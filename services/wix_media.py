# services/wix_media.py — Wix Media Manager API (folders, file import, files)
from __future__ import annotations
import logging
from collections import deque

from config import WixSettings
from errors import RemoteApiError, MediaImportError, MalformedResponseError
from models import FolderNode, MediaAsset, ImportRequest, BulkImportOutcome
from services.http import WixHttp

log = logging.getLogger(__name__)


class WixMediaClient:
    def __init__(self, settings: WixSettings, session=None):
        self.settings = settings
        self.http = WixHttp(
            settings.media_base_url,
            {
                "Authorization": f"Bearer {settings.api_key}",
                "wix-account-id": settings.account_id,
                "wix-site-id": settings.site_id,
                "Content-Type": "application/json",
            },
            settings.timeout,
            session=session,
        )

    # ─── Folders ────────────────────────────────────────────────────────────
    def list_folders(self, parent_id: str | None = None) -> list[FolderNode]:
        params = {"parentFolderId": parent_id} if parent_id else None
        resp = self.http.call("GET", "/folders", params=params)
        if not resp.ok:
            raise RemoteApiError(f"Failed to list folders: {WixHttp.describe(resp)}",
                                 status_code=resp.status_code)
        body = WixHttp.body(resp, "folder list")
        return [FolderNode.from_payload(f) for f in body.get("folders") or []]

    def list_all_folders(self, root_id: str | None = None) -> list[FolderNode]:
        out: list[FolderNode] = []
        queue = deque([root_id or self.settings.root_folder_id])
        while queue:
            for child in self.list_folders(queue.popleft()):
                out.append(child)
                queue.append(child.id)
        return out

    def get_folder(self, folder_id: str) -> FolderNode | None:
        resp = self.http.call("GET", f"/folders/{folder_id}")
        if resp.status_code == 404:
            return None
        if not resp.ok:
            raise RemoteApiError(f"Failed to get folder: {WixHttp.describe(resp)}",
                                 status_code=resp.status_code)
        return FolderNode.from_payload(WixHttp.body(resp, "folder get").get("folder"))

    def create_folder(self, display_name: str, parent_id: str | None = None) -> FolderNode:
        resp = self.http.call("POST", "/folders", json={
            "displayName": display_name,
            "parentFolderId": parent_id or self.settings.root_folder_id,
        })
        if not resp.ok:
            raise RemoteApiError(f"Failed to create folder {display_name!r}: {WixHttp.describe(resp)}",
                                 status_code=resp.status_code)
        folder = FolderNode.from_payload(WixHttp.body(resp, "folder create").get("folder"))
        log.info("created folder %s (%s) under %s", display_name, folder.id, parent_id)
        return folder

    # ─── Import ─────────────────────────────────────────────────────────────
    def import_file(self, req: ImportRequest) -> MediaAsset:
        try:
            resp = self.http.call("POST", "/files/import", json=req.to_payload())
        except RemoteApiError as e:
            raise MediaImportError(f"Failed to import file: {e.message}") from e
        if not resp.ok:
            raise MediaImportError(f"Failed to import file: {WixHttp.describe(resp)}")
        try:
            body = WixHttp.body(resp, "Import")
            if not body.get("file"):
                raise MalformedResponseError("Import response missing file data")
            return MediaAsset.from_payload(body["file"])
        except MalformedResponseError as e:
            raise MediaImportError(e.message) from e

    def bulk_import(self, reqs: list[ImportRequest]) -> list[BulkImportOutcome]:
        if not reqs:
            return []
        try:
            resp = self.http.call("POST", "/bulk/files/import-v2", json={
                "importFileRequests": [r.to_payload() for r in reqs],
                "returnEntity": True,
            })
        except RemoteApiError as e:
            raise MediaImportError(f"Failed to bulk import files: {e.message}") from e
        if not resp.ok:
            raise MediaImportError(f"Failed to bulk import files: {WixHttp.describe(resp)}")
        try:
            results = WixHttp.body(resp, "Bulk import").get("results")
            if not isinstance(results, list) or len(results) != len(reqs):
                raise MalformedResponseError(
                    f"Bulk import returned {len(results or [])} results for {len(reqs)} files")
            return [BulkImportOutcome.from_payload(r) for r in results]
        except MalformedResponseError as e:
            raise MediaImportError(e.message) from e

    # ─── Files ──────────────────────────────────────────────────────────────
    def list_files(self, parent_id: str | None = None) -> list[MediaAsset]:
        params = {"parentFolderId": parent_id} if parent_id else None
        resp = self.http.call("GET", "/files", params=params)
        if not resp.ok:
            raise RemoteApiError(f"Failed to list media: {WixHttp.describe(resp)}",
                                 status_code=resp.status_code)
        return [MediaAsset.from_payload(f) for f in WixHttp.body(resp, "file list").get("files") or []]

    def get_file(self, file_id: str) -> MediaAsset | None:
        resp = self.http.call("GET", f"/files/{file_id}")
        if resp.status_code == 404:
            return None
        if not resp.ok:
            raise RemoteApiError(f"Failed to get file: {WixHttp.describe(resp)}",
                                 status_code=resp.status_code)
        return MediaAsset.from_payload(WixHttp.body(resp, "file get").get("file"))

    def delete_file(self, file_id: str) -> bool:
        resp = self.http.call("DELETE", f"/files/{file_id}")
        if resp.status_code == 404:
            return False
        if not resp.ok:
            raise RemoteApiError(f"Failed to delete file: {WixHttp.describe(resp)}",
                                 status_code=resp.status_code)
        log.info("deleted media file %s", file_id)
        return True
