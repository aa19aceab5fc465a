"""
HTTP client for the master-data CRUD endpoints.

``MasterCrudClient`` wraps one resource (for example
``/api/master/category-programs``) and exposes create, update, delete and
list calls that never raise. A failed call stores a human-readable message
in ``client.error`` and returns ``None`` (or ``False`` for delete); the
message is the server's ``error`` field when present, otherwise a default
built from the entity name.

The caller supplies the ``httpx.Client`` so that base URL, cookies and
timeouts stay under its control; a FastAPI ``TestClient`` works too.

Example::

    with httpx.Client(base_url="http://localhost:8000", cookies=cookies) as http:
        categories = MasterCrudClient(http, "/api/master/category-programs", "Kategori")
        created = categories.create({"name": "Pendidikan"})
        if created is None:
            print(categories.error)
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class MasterCrudClient:
    """Error-capturing CRUD calls against a single master-data endpoint.

    Attributes:
        endpoint: Collection path, without trailing slash.
        entity_name: Display name used in default error messages.
        loading: ``True`` while a request is in flight.
        error: Message of the last failed call, or ``None``.
    """

    def __init__(self, http_client: httpx.Client, endpoint: str, entity_name: str) -> None:
        self.http_client = http_client
        self.endpoint = endpoint.rstrip("/")
        self.entity_name = entity_name
        self.loading = False
        self.error: str | None = None

    def clear_error(self) -> None:
        self.error = None

    def list(self) -> list[dict[str, Any]] | None:
        default_error = f"Gagal memuat {self._label}"
        body = self._request("GET", self.endpoint, None, default_error)
        if body is None:
            return None
        rows = body.get("data", []) if isinstance(body, dict) else None
        if not isinstance(rows, list):
            self.error = default_error
            logger.error("GET %s returned an unexpected body: %r", self.endpoint, body)
            return None
        return rows

    def create(self, data: dict[str, Any]) -> dict[str, Any] | None:
        return self._request("POST", self.endpoint, data, f"Gagal membuat {self._label}")

    def update(self, record_id: int | str, data: dict[str, Any]) -> dict[str, Any] | None:
        return self._request(
            "PUT", f"{self.endpoint}/{record_id}", data, f"Gagal mengupdate {self._label}"
        )

    def delete(self, record_id: int | str) -> bool:
        body = self._request(
            "DELETE", f"{self.endpoint}/{record_id}", None, f"Gagal menghapus {self._label}"
        )
        return body is not None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @property
    def _label(self) -> str:
        return self.entity_name.lower()

    def _request(
        self,
        method: str,
        url: str,
        data: dict[str, Any] | None,
        default_error: str,
    ) -> dict[str, Any] | None:
        self.loading = True
        self.error = None
        try:
            response = self.http_client.request(method, url, json=data)
            if response.is_success:
                try:
                    return response.json()
                except ValueError:
                    self.error = default_error
                    logger.error("%s %s returned a non-JSON body (%d)", method, url, response.status_code)
                    return None
            self.error = _server_error(response) or default_error
            logger.error("%s %s failed (%d): %s", method, url, response.status_code, self.error)
            return None
        except httpx.HTTPError as exc:
            self.error = default_error
            logger.error("%s %s failed: %s", method, url, exc)
            return None
        finally:
            self.loading = False


def _server_error(response: httpx.Response) -> str | None:
    """Return the ``error`` field of a JSON error body, if any."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return None
