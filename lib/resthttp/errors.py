from __future__ import annotations

import httpx


class RestHttpError(Exception):
    """Base client error."""


class HttpStatusError(RestHttpError):
    def __init__(self, status_code: int, reason: str, message: str = "", code: str = ""):
        self.status_code = status_code
        self.reason = reason
        self.message = message
        self.code = code
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.message:
            return f"{self.status_code} {self.reason}: {self.message}"
        return f"{self.status_code} {self.reason}"


class NetworkError(RestHttpError):
    """Transport/network layer error."""

    def __init__(self, message: str, code: int = 0, detail: str = ""):
        self.message = message
        self.code = code
        self.detail = detail
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message


class PreconditionError(RestHttpError):
    """Local failure detected before (or instead of) talking to the server."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class SourceFileNotFound(PreconditionError):
    def __init__(self, path: str):
        super().__init__(f"file not found: {path}", path=path)


def raise_for_status(resp: httpx.Response, message: str = "") -> None:
    if resp.status_code >= 300:
        raise HttpStatusError(resp.status_code, resp.reason_phrase, message)
