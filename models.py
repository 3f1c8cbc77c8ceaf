# models.py — typed views over Wix payloads (MediaAsset, FolderNode, ContentItem)
# Nothing here is persisted locally: the remote CMS owns every record.
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

from errors import MalformedResponseError


def _require(payload: Any, key: str, where: str):
    if not isinstance(payload, dict) or payload.get(key) in (None, ""):
        raise MalformedResponseError(f"{where} response missing '{key}'")
    return payload[key]


@dataclass(frozen=True)
class FolderNode:
    id: str
    display_name: str
    parent_id: str | None = None
    created_at: str | None = None

    @classmethod
    def from_payload(cls, payload: dict) -> "FolderNode":
        return cls(
            id=_require(payload, "id", "folder"),
            display_name=_require(payload, "displayName", "folder"),
            parent_id=payload.get("parentFolderId"),
            created_at=payload.get("createdDate"),
        )

    def to_json(self) -> dict:
        return {"id": self.id, "displayName": self.display_name,
                "parentFolderId": self.parent_id, "createdDate": self.created_at}


@dataclass(frozen=True)
class MediaAsset:
    id: str
    url: str
    display_name: str | None = None
    mime_type: str | None = None
    media_type: str | None = None
    created_at: str | None = None
    parent_folder_id: str | None = None

    @classmethod
    def from_payload(cls, payload: dict) -> "MediaAsset":
        return cls(
            id=_require(payload, "id", "file"),
            url=_require(payload, "url", "file"),
            display_name=payload.get("displayName"),
            mime_type=payload.get("mimeType"),
            media_type=payload.get("mediaType"),
            created_at=payload.get("createdDate"),
            parent_folder_id=payload.get("parentFolderId"),
        )

    def to_json(self, filename: str | None = None, path: str | None = None) -> dict:
        return {
            "id": self.id,
            "url": self.url,
            "filename": filename if filename is not None else self.display_name,
            "path": path if path is not None else (self.parent_folder_id or ""),
            "mediaType": (self.media_type or "").lower(),
            "uploaded": self.created_at,
        }


@dataclass
class ContentItem:
    """A Gallery or News record; the remote `_id` is exposed as `id`."""
    id: str
    data: dict = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: dict) -> "ContentItem":
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            raise MalformedResponseError("data item response missing 'data'")
        return cls(id=_require(data, "_id", "data item"), data=dict(data))

    def to_json(self) -> dict:
        return {**self.data, "id": self.id}


@dataclass(frozen=True)
class ImportRequest:
    url: str
    display_name: str
    parent_folder_id: str
    mime_type: str
    media_type: str = "IMAGE"
    private: bool = False

    def to_payload(self) -> dict:
        return {
            "url": self.url,
            "displayName": self.display_name,
            "parentFolderId": self.parent_folder_id,
            "mimeType": self.mime_type,
            "mediaType": self.media_type,
            "private": self.private,
        }


@dataclass(frozen=True)
class BulkImportOutcome:
    asset: MediaAsset | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.asset is not None

    @classmethod
    def from_payload(cls, payload: dict) -> "BulkImportOutcome":
        if not isinstance(payload, dict):
            return cls(error="bulk import result is not an object")
        success = payload.get("success") or {}
        if success.get("file"):
            try:
                return cls(asset=MediaAsset.from_payload(success["file"]))
            except MalformedResponseError as e:
                return cls(error=e.message)
        failure = payload.get("failure") or {}
        return cls(error=failure.get("message") or "unknown import failure")
