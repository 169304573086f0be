"""Small blocking HTTP client that reports failures in its response."""

from __future__ import annotations

import http.client
from collections.abc import Mapping
from dataclasses import dataclass, field
from email.message import Message
from urllib.parse import urlsplit

_HEADER_STRIP = " \t\r\n"

_CONNECTIONS = {
    "http": http.client.HTTPConnection,
    "https": http.client.HTTPSConnection,
}


@dataclass
class HttpResponse:
    """Outcome of a request.

    ``success`` is true whenever a response arrived, whatever its status
    code; it is false only when the request could not be carried out, in
    which case ``error_message`` says why.
    """

    status_code: int = 0
    body: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    error_message: str = ""
    success: bool = False


def _collect_headers(message: Message | None) -> dict[str, str]:
    headers: dict[str, str] = {}
    if message is None:
        return headers
    for key, value in message.items():
        headers.setdefault(key, value.strip(_HEADER_STRIP))
    return headers


class HttpClient:
    """Sends HTTP requests; redirects are returned, not followed."""

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout

    def get(self, url: str, headers: Mapping[str, str] | None = None) -> HttpResponse:
        return self.request("GET", url, "", headers)

    def post(
        self, url: str, body: str, headers: Mapping[str, str] | None = None
    ) -> HttpResponse:
        return self.request("POST", url, body, headers)

    def put(
        self, url: str, body: str, headers: Mapping[str, str] | None = None
    ) -> HttpResponse:
        return self.request("PUT", url, body, headers)

    def delete(self, url: str, headers: Mapping[str, str] | None = None) -> HttpResponse:
        return self.request("DELETE", url, "", headers)

    def request(
        self,
        method: str,
        url: str,
        body: str = "",
        headers: Mapping[str, str] | None = None,
    ) -> HttpResponse:
        """Perform a request; transport errors end up in the response."""
        data = body.encode("utf-8") if body else None
        try:
            parts = urlsplit(url)
            connection_class = _CONNECTIONS.get(parts.scheme.lower())
            if connection_class is None:
                return HttpResponse(
                    error_message=f"Unsupported protocol: {parts.scheme or url}"
                )
            if not parts.hostname:
                return HttpResponse(error_message=f"URL has no host: {url}")
            path = parts.path or "/"
            if parts.query:
                path = f"{path}?{parts.query}"
            connection = connection_class(
                parts.hostname, parts.port, timeout=self.timeout
            )
            try:
                connection.request(
                    method, path, body=data, headers=dict(headers or {})
                )
                response = connection.getresponse()
                raw = response.read()
                return self._build(response.status, raw, response.headers)
            finally:
                connection.close()
        except (OSError, ValueError, http.client.HTTPException) as err:
            return HttpResponse(error_message=str(err) or type(err).__name__)

    @staticmethod
    def _build(status: int, raw: bytes, message: Message | None) -> HttpResponse:
        return HttpResponse(
            status_code=int(status),
            body=raw.decode("utf-8", errors="replace"),
            headers=_collect_headers(message),
            success=True,
        )