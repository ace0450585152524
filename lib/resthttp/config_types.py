from __future__ import annotations

import base64
from dataclasses import dataclass, field

DEFAULT_ACCEPT = "application/json"
DEFAULT_USER_AGENT = "resthttp/0.1.0"


def basic_auth_header(username: str, password: str) -> str:
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


@dataclass(frozen=True)
class ClientConfig:
    base_url: str
    username: str = ""
    password: str = field(default="", repr=False)
    verify_ssl: bool = True
    debug: bool = False
    timeout_s: float = 10.0
    strict_status: bool = False
    user_agent: str = DEFAULT_USER_AGENT
    default_headers: tuple[tuple[str, str], ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", (self.base_url or "").rstrip("/"))

        headers: list[tuple[str, str]] = [("Accept", DEFAULT_ACCEPT)]
        if self.user_agent:
            headers.append(("User-Agent", self.user_agent))
        if self.username and self.password:
            headers.append(("Authorization", basic_auth_header(self.username, self.password)))
        object.__setattr__(self, "default_headers", tuple(headers))
