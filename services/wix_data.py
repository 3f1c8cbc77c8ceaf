# services/wix_data.py — Wix Data API (Gallery / News collections)
from __future__ import annotations
import logging

from config import WixSettings
from errors import RemoteApiError, NotFoundError
from models import ContentItem
from services.http import WixHttp

log = logging.getLogger(__name__)

COLLECTIONS = ("Gallery", "News")


class WixDataClient:
    def __init__(self, settings: WixSettings, session=None):
        self.settings = settings
        self.http = WixHttp(
            settings.data_base_url,
            {
                "Authorization": settings.api_key,
                "wix-site-id": settings.site_id,
                "wix-account-id": settings.account_id,
                "Content-Type": "application/json",
            },
            settings.timeout,
            session=session,
        )

    def _fail(self, verb: str, collection: str, resp):
        msg = f"Failed to {verb} {collection.lower()} item: {WixHttp.describe(resp)}"
        if resp.status_code == 404:
            raise NotFoundError(msg)
        raise RemoteApiError(msg, status_code=resp.status_code)

    def query(self, collection: str) -> list[ContentItem]:
        resp = self.http.call("POST", "/items/query", json={
            "dataCollectionId": collection,
            "query": {
                "sort": [{"fieldName": "_createdDate", "order": "DESC"}],
                "paging": {"limit": self.settings.query_limit},
            },
        })
        if not resp.ok:
            self._fail("fetch", collection, resp)
        body = WixHttp.body(resp, f"{collection} query")
        return [ContentItem.from_payload(it) for it in body.get("dataItems") or []]

    def get(self, collection: str, item_id: str) -> ContentItem:
        for item in self.query(collection):
            if item.id == item_id:
                return item
        raise NotFoundError("Not found")

    def create(self, collection: str, data: dict) -> ContentItem:
        resp = self.http.call("POST", "/items", json={
            "dataCollectionId": collection,
            "dataItem": {"data": data},
        })
        if not resp.ok:
            self._fail("create", collection, resp)
        item = ContentItem.from_payload(WixHttp.body(resp, f"{collection} create").get("dataItem"))
        log.info("created %s item %s", collection, item.id)
        return item

    def update(self, collection: str, item_id: str, data: dict) -> ContentItem:
        mods = [
            {"fieldPath": key, "action": "SET_FIELD", "setFieldOptions": {"value": value}}
            for key, value in data.items() if key not in ("id", "_id")
        ]
        resp = self.http.call("PATCH", f"/items/{item_id}", json={
            "dataCollectionId": collection,
            "patch": {"dataItemId": item_id, "fieldModifications": mods},
        })
        if not resp.ok:
            self._fail("update", collection, resp)
        item = ContentItem.from_payload(WixHttp.body(resp, f"{collection} update").get("dataItem"))
        log.info("updated %s item %s (%d fields)", collection, item_id, len(mods))
        return item

    def delete(self, collection: str, item_id: str) -> None:
        resp = self.http.call("DELETE", f"/items/{item_id}",
                              params={"dataCollectionId": collection})
        if not resp.ok:
            self._fail("delete", collection, resp)
        log.info("deleted %s item %s", collection, item_id)
