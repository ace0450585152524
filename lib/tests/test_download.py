from __future__ import annotations

import errno
import io
from pathlib import Path

import httpx
import pytest

from resthttp import ClientConfig, HttpStatusError, NetworkError, PreconditionError, RestClient


def _client(handler) -> RestClient:
    return RestClient(ClientConfig(base_url="http://files.test"), transport=httpx.MockTransport(handler))


def test_download_writes_exact_bytes(tmp_path) -> None:
    payload = bytes(range(256)) * 1024
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, content=payload)

    dest = tmp_path / "out.bin"
    with _client(handler) as client:
        result = client.download("blobs", "a\\b\\c.bin", dest, accept="application/octet-stream", query={"v": "2"})

    assert result == dest
    assert dest.read_bytes() == payload
    assert str(seen[0].url) == "http://files.test/blobs/a/b/c.bin?v=2"
    assert "application/octet-stream" in seen[0].headers.get_list("accept")


def test_download_rejects_error_status_before_creating_file(tmp_path) -> None:
    dest = tmp_path / "missing.bin"
    with _client(lambda request: httpx.Response(404, content=b"nope")) as client:
        with pytest.raises(HttpStatusError) as exc:
            client.download("blobs", "missing.bin", dest)
    assert exc.value.status_code == 404
    assert exc.value.reason == "Not Found"
    assert not dest.exists()


def _redirecting(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/blobs/a.bin":
        return httpx.Response(302, headers={"Location": "/cdn/a.bin"}, content=b"moved")
    return httpx.Response(200, content=b"PAYLOAD")


def test_download_follows_redirect_to_final_body(tmp_path) -> None:
    dest = tmp_path / "a.bin"
    with _client(_redirecting) as client:
        client.download("blobs", "a.bin", dest)
    assert dest.read_bytes() == b"PAYLOAD"


def test_download_rejects_redirect_without_location(tmp_path) -> None:
    dest = tmp_path / "moved.bin"
    with _client(lambda request: httpx.Response(302, content=b"moved")) as client:
        with pytest.raises(HttpStatusError) as exc:
            client.download("blobs", "moved.bin", dest)
    assert exc.value.status_code == 302
    assert not dest.exists()


def test_download_defaults_to_last_resource_segment(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    with _client(lambda request: httpx.Response(200, content=b"photo")) as client:
        result = client.download("photos", "albums\\1\\cat.jpg")
    assert str(result) == "cat.jpg"
    assert (tmp_path / "cat.jpg").read_bytes() == b"photo"


def test_download_without_file_name_fails_locally(tmp_path) -> None:
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200)

    with _client(handler) as client:
        with pytest.raises(PreconditionError):
            client.download("photos", "albums/")
    assert calls == []


def test_download_create_failure_is_precondition_error(tmp_path) -> None:
    dest = tmp_path / "no-such-dir" / "file.bin"
    with _client(lambda request: httpx.Response(200, content=b"x")) as client:
        with pytest.raises(PreconditionError) as exc:
            client.download("blobs", "file.bin", dest)
    assert exc.value.path == str(dest)


def test_download_removes_partial_file_on_stream_error(tmp_path) -> None:
    class _BrokenStream(httpx.SyncByteStream):
        def __iter__(self):
            yield b"partial"
            raise httpx.ReadError("connection reset")

    dest = tmp_path / "partial.bin"
    with _client(lambda request: httpx.Response(200, stream=_BrokenStream())) as client:
        with pytest.raises(NetworkError):
            client.download("blobs", "partial.bin", dest)
    assert not dest.exists()


def test_download_removes_partial_file_on_write_error(tmp_path, monkeypatch) -> None:
    class _FullDisk(io.FileIO):
        def write(self, data):
            super().write(bytes(data[:1]))
            raise OSError(errno.ENOSPC, "No space left on device")

    monkeypatch.setattr(Path, "open", lambda self, *args, **kwargs: _FullDisk(str(self), "w"))
    dest = tmp_path / "full.bin"
    with _client(lambda request: httpx.Response(200, content=b"0123456789")) as client:
        with pytest.raises(PreconditionError) as exc:
            client.download("blobs", "full.bin", dest)
    assert exc.value.path == str(dest)
    assert not dest.exists()
