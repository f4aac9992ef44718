"""Thin httpx transport for the Cloudinary upload and admin APIs."""

from __future__ import annotations

import json
from typing import Any

import httpx

from cloudinary_uploader.exceptions import DecodeError, NetworkError, RemoteRejectionError

DEFAULT_USER_AGENT = "cloudinary-uploader/0.1.0"


def _error_message(response: httpx.Response) -> str:
    """Extract the service error message, falling back to the HTTP status."""
    # JSON errors look like {"error":{"message":"Missing required parameter - public_id"}}
    try:
        data = response.json()
        return str(data["error"]["message"])
    except (ValueError, KeyError, TypeError):
        return f"{response.status_code} {response.reason_phrase}"


class CloudinaryAPI:
    """Sends requests and maps transport and status failures to library errors."""

    def __init__(
        self,
        auth: tuple[str, str] | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._client = client or httpx.Client(headers={"User-Agent": DEFAULT_USER_AGENT})
        self._auth = auth

    def _send(
        self,
        method: str,
        url: str,
        error_cls: type[RemoteRejectionError],
        **kwargs: Any,
    ) -> httpx.Response:
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.TransportError as e:
            raise NetworkError(f"{method} {url} failed: {e}") from e
        if not response.is_success:
            raise error_cls(
                _error_message(response),
                status_code=response.status_code,
                body=response.text,
            )
        return response

    def decode(self, response: httpx.Response) -> dict[str, Any]:
        try:
            data = response.json()
        except json.JSONDecodeError as e:
            raise DecodeError(f"Malformed JSON response from {response.url}: {e}") from e
        if not isinstance(data, dict):
            raise DecodeError(f"Unexpected JSON response from {response.url}")
        return data

    def post_multipart(
        self,
        url: str,
        fields: list[tuple[str, str]],
        files: dict[str, tuple[str | None, bytes]] | None = None,
        *,
        error_cls: type[RemoteRejectionError] = RemoteRejectionError,
    ) -> dict[str, Any]:
        """POST a multipart/form-data body and decode the JSON answer."""
        response = self._send("POST", url, error_cls, data=dict(fields), files=files or {})
        return self.decode(response)

    def post_form(self, url: str, data: dict[str, str]) -> httpx.Response:
        """POST a form-encoded body."""
        return self._send("POST", url, RemoteRejectionError, data=data)

    def get_json(self, url: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """GET an admin API resource with basic auth."""
        response = self._send("GET", url, RemoteRejectionError, params=params, auth=self._auth)
        return self.decode(response)

    def close(self) -> None:
        self._client.close()
