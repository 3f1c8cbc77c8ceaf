# services/http.py — requests plumbing shared by the Wix clients
from __future__ import annotations
import logging

import requests

from errors import RemoteApiError, RemoteTimeoutError, MalformedResponseError

log = logging.getLogger(__name__)


class WixHttp:
    """Thin wrapper over a requests session bound to one Wix API base URL."""

    def __init__(self, base_url: str, headers: dict, timeout: float, session=None):
        self.base_url = base_url.rstrip("/")
        self.headers = headers
        self.timeout = timeout
        self.session = session or requests.Session()

    def call(self, method: str, path: str, *, json=None, params=None):
        url = f"{self.base_url}{path}"
        try:
            return self.session.request(method, url, json=json, params=params,
                                        headers=self.headers, timeout=self.timeout)
        except requests.Timeout as e:
            raise RemoteTimeoutError(f"{method} {path} timed out after {self.timeout}s") from e
        except requests.RequestException as e:
            raise RemoteApiError(f"{method} {path} failed: {e}") from e

    @staticmethod
    def describe(resp) -> str:
        return f"{resp.status_code} {resp.reason} - {resp.text}"

    @staticmethod
    def body(resp, what: str) -> dict:
        try:
            data = resp.json()
        except ValueError as e:
            raise MalformedResponseError(f"{what} returned non-JSON response: {resp.text}") from e
        if not isinstance(data, dict):
            raise MalformedResponseError(f"{what} returned unexpected JSON: {data!r}")
        return data
