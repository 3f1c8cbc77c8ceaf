# tests/conftest.py — in-memory stand-ins for the Wix APIs and the storage backend
import itertools
import json as _json
from urllib.parse import urlparse

import pytest

from app import create_app
from config import Settings, WixSettings, StorageSettings, UploadLimits
from extensions import Services

DATA = "https://www.wixapis.com/wix-data/v2"
MEDIA = "https://www.wixapis.com/site-media/v1"


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        self.ok = 200 <= status_code < 300
        self.reason = "OK" if self.ok else "Error"
        self._body = body
        self.text = text if text is not None else _json.dumps(body)

    def json(self):
        if self._body is None:
            raise ValueError("no JSON")
        return self._body


class FakeWix:
    """Enough of wix-data/v2 and site-media/v1 for the admin API."""

    def __init__(self):
        self.calls = []
        self.items = {"Gallery": {}, "News": {}}
        self.folders = {}
        self.files = {}
        self.fail = {}             # (method, path prefix) -> status code
        self.import_failures = set()
        self.malformed_imports = set()
        self._ids = itertools.count(1)

    def new_id(self, prefix):
        return f"{prefix}{next(self._ids)}"

    def add_folder(self, name, parent="media-root"):
        fid = self.new_id("f")
        self.folders[fid] = {"id": fid, "displayName": name, "parentFolderId": parent}
        return fid

    def count(self, method, path):
        return sum(1 for m, p, _ in self.calls if m == method and p == path)

    # requests.Session.request signature
    def request(self, method, url, json=None, params=None, headers=None, timeout=None):
        path = urlparse(url).path
        base = "/wix-data/v2" if path.startswith("/wix-data/v2") else "/site-media/v1"
        path = path[len(base):]
        self.calls.append((method, path, {"json": json, "params": params, "headers": headers}))
        for (m, prefix), status in self.fail.items():
            if m == method and path.startswith(prefix):
                return FakeResponse(status, {"message": "injected failure"})
        handler = getattr(self, "_" + base.strip("/").split("/")[0].replace("-", "_"))
        return handler(method, path, json or {}, params or {})

    def _wix_data(self, method, path, body, params):
        if method == "POST" and path == "/items/query":
            coll = self.items[body["dataCollectionId"]]
            rows = [{"data": dict(d)} for d in reversed(list(coll.values()))]
            return FakeResponse(200, {"dataItems": rows})
        if method == "POST" and path == "/items":
            coll = self.items[body["dataCollectionId"]]
            iid = self.new_id("item")
            data = {**body["dataItem"]["data"], "_id": iid}
            coll[iid] = data
            return FakeResponse(200, {"dataItem": {"data": dict(data)}})
        iid = path.rsplit("/", 1)[-1]
        if method == "PATCH":
            coll = self.items[body["dataCollectionId"]]
            if iid not in coll:
                return FakeResponse(404, {"message": "not found"})
            for mod in body["patch"]["fieldModifications"]:
                coll[iid][mod["fieldPath"]] = mod["setFieldOptions"]["value"]
            return FakeResponse(200, {"dataItem": {"data": dict(coll[iid])}})
        if method == "DELETE":
            coll = self.items[params["dataCollectionId"]]
            if coll.pop(iid, None) is None:
                return FakeResponse(404, {"message": "not found"})
            return FakeResponse(200, {})
        return FakeResponse(400, {"message": f"unexpected {method} {path}"})

    def _site_media(self, method, path, body, params):
        if path == "/folders" and method == "GET":
            parent = params.get("parentFolderId", "media-root")
            kids = [f for f in self.folders.values() if f["parentFolderId"] == parent]
            return FakeResponse(200, {"folders": kids})
        if path == "/folders" and method == "POST":
            fid = self.add_folder(body["displayName"], body["parentFolderId"])
            return FakeResponse(200, {"folder": self.folders[fid]})
        if path.startswith("/folders/"):
            f = self.folders.get(path.rsplit("/", 1)[-1])
            return FakeResponse(200, {"folder": f}) if f else FakeResponse(404, {})
        if path == "/files/import":
            return FakeResponse(200, {"file": self._register(body)})
        if path == "/bulk/files/import-v2":
            results = []
            for req in body["importFileRequests"]:
                if req["url"] in self.import_failures:
                    results.append({"failure": {"code": "BAD", "message": "cannot fetch url"}})
                elif req["url"] in self.malformed_imports:
                    results.append({"success": {"file": {"id": self.new_id("file")}}})
                else:
                    results.append({"success": {"file": self._register(req)}})
            return FakeResponse(200, {"results": results})
        if path == "/files" and method == "GET":
            parent = params.get("parentFolderId")
            files = [f for f in self.files.values() if not parent or f["parentFolderId"] == parent]
            return FakeResponse(200, {"files": files})
        if path.startswith("/files/"):
            fid = path.rsplit("/", 1)[-1]
            if fid not in self.files:
                return FakeResponse(404, {})
            if method == "DELETE":
                del self.files[fid]
                return FakeResponse(200, {})
            return FakeResponse(200, {"file": self.files[fid]})
        return FakeResponse(400, {"message": f"unexpected {method} {path}"})

    def _register(self, req):
        fid = self.new_id("file")
        self.files[fid] = {
            "id": fid,
            "url": f"https://static.wixstatic.com/media/{fid}.png",
            "displayName": req["displayName"],
            "parentFolderId": req["parentFolderId"],
            "mimeType": req["mimeType"],
            "mediaType": req["mediaType"],
            "createdDate": "2025-06-01T10:00:00Z",
            "sourceUrl": req["url"],
        }
        return dict(self.files[fid])


class FakeUploader:
    """Mimics cloudinary.uploader.upload with overwrite=False."""

    def __init__(self):
        self.stored = {}
        self.fail_keys = set()
        self.calls = []

    def upload(self, file, public_id=None, **options):
        from cloudinary.exceptions import Error
        self.calls.append((public_id, options))
        if any(k in public_id for k in self.fail_keys):
            raise Error("quota exceeded")
        if public_id in self.stored:
            return {"public_id": public_id, "existing": True,
                    "secure_url": f"https://res.cloudinary.com/demo/image/upload/{public_id}"}
        self.stored[public_id] = file.read()
        return {"public_id": public_id,
                "secure_url": f"https://res.cloudinary.com/demo/image/upload/{public_id}"}


@pytest.fixture
def settings():
    return Settings(
        wix=WixSettings(api_key="key", site_id="site", account_id="acct"),
        storage=StorageSettings(cloud_name="demo", api_key="k", api_secret="s"),
        limits=UploadLimits(max_image_bytes=2048, max_thumbnail_bytes=512),
        secret_key="test",
    )


@pytest.fixture
def wix():
    return FakeWix()


@pytest.fixture
def store():
    return FakeUploader()


@pytest.fixture
def services(settings, wix, store):
    return Services.build(settings, session=wix, uploader_backend=store)


@pytest.fixture
def client(services):
    app = create_app(services=services)
    app.config["TESTING"] = True
    return app.test_client()
