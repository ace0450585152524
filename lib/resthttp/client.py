from __future__ import annotations

import contextlib
import logging
import os
from pathlib import Path
from typing import IO, Any, Mapping

import httpx

from .config_types import ClientConfig
from .errors import NetworkError, PreconditionError, SourceFileNotFound, raise_for_status
from .transport import Transport
from .urls import Query, encode_query, make_url

log = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
DEFAULT_UPLOAD_CONTENT_TYPE = "application/octet-stream"


class RestClient:
    """Convenience wrapper for container/resource style REST APIs.

    Verb methods return the raw response body and leave status handling to
    the caller unless ``ClientConfig.strict_status`` is set. ``download``
    always rejects statuses >= 300.
    """

    def __init__(self, cfg: ClientConfig, *, transport: httpx.BaseTransport | None = None):
        self._cfg = cfg
        self._t = Transport(cfg, transport=transport)

    @classmethod
    def create(
            cls,
            base_url: str,
            username: str = "",
            password: str = "",
            *,
            verify_ssl: bool = True,
            debug: bool = False,
            timeout_s: float = 10.0,
    ) -> "RestClient":
        return cls(
            ClientConfig(
                base_url=base_url,
                username=username,
                password=password,
                verify_ssl=verify_ssl,
                debug=debug,
                timeout_s=timeout_s,
            )
        )

    @property
    def config(self) -> ClientConfig:
        return self._cfg

    def close(self) -> None:
        self._t.close()

    def __enter__(self) -> "RestClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def make_url(self, container: str = "", resource: str = "", query: Query | None = None) -> str:
        return make_url(self._cfg.base_url, container, resource, query)

    # --- verbs ---
    def head(self, container: str, resource: str = "") -> int:
        url = self.make_url(container, resource)
        resp = self._t.request("HEAD", url, headers=self._t.build_headers())
        return resp.status_code

    def get(self, container: str, resource: str = "", query: Query | None = None, accept: str = "") -> bytes:
        url = self.make_url(container, resource, query)
        resp = self._t.request("GET", url, headers=self._t.build_headers(accept=accept))
        return self._body(resp)

    def post(self, container: str, resource: str = "", params: Query | None = None, accept: str = "") -> bytes:
        return self._send_form("POST", container, resource, params, accept)

    def put(self, container: str, resource: str = "", params: Query | None = None, accept: str = "") -> bytes:
        return self._send_form("PUT", container, resource, params, accept)

    def delete(self, container: str, resource: str = "", query: Query | None = None, accept: str = "") -> bytes:
        url = self.make_url(container, resource, query)
        resp = self._t.request("DELETE", url, headers=self._t.build_headers(accept=accept))
        return self._body(resp)

    def _send_form(self, method: str, container: str, resource: str, params: Query | None, accept: str) -> bytes:
        url = self.make_url(container, resource)
        headers = self._t.build_headers({"Content-Type": FORM_CONTENT_TYPE}, accept=accept)
        resp = self._t.request(method, url, headers=headers, content=encode_query(params).encode("ascii"))
        return self._body(resp)

    def _body(self, resp: httpx.Response) -> bytes:
        if self._cfg.strict_status:
            raise_for_status(resp)
        return resp.content

    # --- files ---
    def download(
            self,
            container: str,
            resource: str,
            save_path: str | os.PathLike[str] = "",
            accept: str = "",
            query: Query | None = None,
    ) -> Path:
        resource = resource.replace("\\", "/")
        if not save_path:
            save_path = resource.rsplit("/", 1)[-1]
            if not save_path:
                raise PreconditionError(f"cannot derive a file name from resource {resource!r}")
        dest = Path(save_path)

        url = self.make_url(container, resource, query)
        with self._t.stream("GET", url, headers=self._t.build_headers(accept=accept)) as resp:
            raise_for_status(resp)
            try:
                f = dest.open("wb")
            except OSError as e:
                raise PreconditionError(f"could not create file: {e}", path=str(dest)) from e
            size = 0
            try:
                with f:
                    for chunk in resp.iter_bytes():
                        f.write(chunk)
                        size += len(chunk)
            except httpx.HTTPError as e:
                dest.unlink(missing_ok=True)
                raise NetworkError(f"could not download file {dest}", detail=str(e)) from e
            except OSError as e:
                dest.unlink(missing_ok=True)
                raise PreconditionError(f"could not write file: {e}", path=str(dest)) from e

        if self._cfg.debug:
            log.info("===> downloaded %d bytes to %s", size, dest)
        return dest

    def upload_file(
            self,
            container: str,
            resource: str,
            fileobj: IO[bytes],
            params: Mapping[str, Any] | None = None,
            content_type: str = "",
    ) -> bytes:
        name = os.path.basename(str(getattr(fileobj, "name", "") or "")) or "file"
        files = [("file", (name, fileobj, content_type or DEFAULT_UPLOAD_CONTENT_TYPE))]
        return self._send_multipart(self.make_url(container, resource), files, data=dict(params or {}))

    def upload_path(
            self,
            container: str,
            src_path: str | os.PathLike[str],
            dst_name: str = "",
            content_type: str = "",
    ) -> bytes:
        src = Path(src_path)
        if not src.is_file():
            raise SourceFileNotFound(str(src))
        url = self.make_url(container)
        with _open_source(src) as f:
            files = [("file", (dst_name or src.name, f, content_type or DEFAULT_UPLOAD_CONTENT_TYPE))]
            return self._send_multipart(url, files)

    def upload_files(
            self,
            container: str,
            src_dst: Mapping[str | os.PathLike[str], str],
            content_type: str = "",
    ) -> bytes:
        """Upload several files as parts of one multipart POST.

        Every source is opened before anything is sent. If one fails to open,
        the ones already opened are closed and the error propagates.
        """
        url = self.make_url(container)
        ctype = content_type or DEFAULT_UPLOAD_CONTENT_TYPE
        with contextlib.ExitStack() as stack:
            files = []
            for src_path, dst_name in src_dst.items():
                src = Path(src_path)
                f = stack.enter_context(_open_source(src))
                files.append(("files", (dst_name or src.name, f, ctype)))
            return self._send_multipart(url, files)

    def _send_multipart(self, url: str, files: list, data: dict | None = None) -> bytes:
        resp = self._t.request("POST", url, headers=self._t.build_headers(), files=files, data=data or None)
        return self._body(resp)


def _open_source(path: Path) -> IO[bytes]:
    try:
        return path.open("rb")
    except FileNotFoundError as e:
        raise SourceFileNotFound(str(path)) from e
    except OSError as e:
        raise PreconditionError(f"could not open file: {e}", path=str(path)) from e
