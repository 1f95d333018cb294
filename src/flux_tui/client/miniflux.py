from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config import (
    HTTP_TIMEOUT,
    REQUEST_HEADERS,
    RETRY_BACKOFF,
    RETRY_STATUSES,
    RETRY_TOTAL,
)
from ..datamodels import Entry, ListViewType, ReadStatus
from .base import ClientError, FeedClient

logger = logging.getLogger("flux")


class MinifluxClient(FeedClient):
    def __init__(self, server_url: str, api_key: str, timeout: float = HTTP_TIMEOUT):
        self.base_url = server_url.rstrip("/")
        self.timeout = timeout
        self.session = self._create_session(api_key)

    def _create_session(self, api_key: str) -> requests.Session:
        s = requests.Session()
        s.headers.update(REQUEST_HEADERS)
        s.headers["X-Auth-Token"] = api_key
        # Only reads are retried. PUT /bookmark toggles, so a replay can undo it.
        retries = Retry(
            total=RETRY_TOTAL,
            backoff_factor=RETRY_BACKOFF,
            status_forcelist=RETRY_STATUSES,
            allowed_methods=["GET"],
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retries)
        s.mount("https://", adapter)
        s.mount("http://", adapter)
        return s

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        url = f"{self.base_url}/v1{path}"
        logger.debug("%s %s params=%s", method, url, params)
        try:
            resp = self.session.request(
                method, url, params=params, json=json, timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise ClientError(None, str(e)) from e

        if not resp.ok:
            message = _error_message(resp)
            logger.warning("%s %s returned %d: %s", method, url, resp.status_code, message)
            raise ClientError(resp.status_code, message)
        return resp

    def _json(self, resp: requests.Response) -> Dict[str, Any]:
        try:
            data = resp.json()
        except ValueError as e:
            raise ClientError(resp.status_code, f"Malformed response: {e}") from e
        if not isinstance(data, dict):
            raise ClientError(resp.status_code, "Malformed response: expected an object")
        return data

    def list_entries(
        self, view_type: ListViewType, limit: int, offset: int
    ) -> List[Entry]:
        params: Dict[str, Any] = {
            "order": "published_at",
            "direction": "desc",
            "limit": limit,
            "offset": offset,
        }
        if view_type is ListViewType.STARRED_ENTRIES:
            params["starred"] = "true"
        else:
            params["status"] = "unread"

        resp = self._request("GET", "/entries", params=params)
        data = self._json(resp)
        try:
            entries = [Entry.from_dict(e) for e in data.get("entries") or []]
        except (KeyError, TypeError, ValueError) as e:
            raise ClientError(resp.status_code, f"Malformed entry in response: {e}") from e
        logger.debug("Received %d %s entries", len(entries), view_type.value)
        return entries

    def set_read_status(self, entry_id: int, status: ReadStatus) -> None:
        self._update_entries([entry_id], status)

    def toggle_starred(self, entry_id: int) -> None:
        self._request("PUT", f"/entries/{entry_id}/bookmark")

    def save(self, entry_id: int) -> None:
        self._request("POST", f"/entries/{entry_id}/save")

    def mark_all_read(self, entry_ids: Sequence[int]) -> None:
        self._update_entries(entry_ids, ReadStatus.READ)

    def refresh_all_feeds(self) -> None:
        self._request("PUT", "/feeds/refresh")

    def fetch_original_content(self, entry_id: int) -> str:
        resp = self._request("GET", f"/entries/{entry_id}/fetch-content")
        content = self._json(resp).get("content")
        if not isinstance(content, str):
            raise ClientError(resp.status_code, "Malformed response: missing content")
        return content

    def _update_entries(self, entry_ids: Sequence[int], status: ReadStatus) -> None:
        self._request(
            "PUT",
            "/entries",
            json={"entry_ids": list(entry_ids), "status": status.value},
        )


def _error_message(resp: requests.Response) -> str:
    """Miniflux reports failures as ``{"error_message": "..."}``."""
    try:
        data = resp.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get("error_message"):
        return str(data["error_message"])
    return resp.reason or "Request failed"
