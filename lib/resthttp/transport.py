from __future__ import annotations

import contextlib
import logging
from typing import Any, Iterator

import httpx

from .config_types import ClientConfig
from .errors import NetworkError

log = logging.getLogger(__name__)


class Transport:
    def __init__(self, cfg: ClientConfig, *, transport: httpx.BaseTransport | None = None):
        self._cfg = cfg
        self._client = httpx.Client(
            timeout=cfg.timeout_s,
            verify=cfg.verify_ssl,
            transport=transport,
            follow_redirects=True,
        )

    def close(self) -> None:
        self._client.close()

    def build_headers(self, headers: dict[str, str] | None = None, *, accept: str = "") -> httpx.Headers:
        # accept overwrites first, defaults are then added on top without replacing
        items: dict[str, str] = dict(headers or {})
        if accept:
            items["Accept"] = accept
        pairs = list(items.items())
        pairs.extend(self._cfg.default_headers)
        return httpx.Headers(pairs)

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: httpx.Headers,
        content: bytes | str | None = None,
        files: Any = None,
        data: Any = None,
    ) -> httpx.Response:
        if self._cfg.debug:
            self._dump(method, url, headers, content)
        try:
            return self._client.request(method, url, headers=headers, content=content, files=files, data=data)
        except httpx.RequestError as e:
            raise _network_error(method, url, e) from e

    @contextlib.contextmanager
    def stream(self, method: str, url: str, *, headers: httpx.Headers) -> Iterator[httpx.Response]:
        if self._cfg.debug:
            self._dump(method, url, headers, None)
        try:
            with self._client.stream(method, url, headers=headers) as resp:
                yield resp
        except httpx.RequestError as e:
            raise _network_error(method, url, e) from e

    def _dump(self, method: str, url: str, headers: httpx.Headers, body: bytes | str | None) -> None:
        log.info("Request: %s %s", method, url)
        for key, value in headers.multi_items():
            if key.lower() == "authorization":
                value = value.split(" ", 1)[0] + " ***"
            log.info("  %s: %s", key, value)
        if body:
            log.info("Body: %s", body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body)


def _network_error(method: str, url: str, exc: httpx.RequestError) -> NetworkError:
    return NetworkError(f"{method} {url} failed", detail=str(exc) or type(exc).__name__)
