from __future__ import annotations

import contextlib
import json
import sys
from typing import Iterator

import typer
from resthttp import HttpStatusError, NetworkError, PreconditionError

from .. import console


def parse_pairs(values: list[str] | None, *, option: str) -> dict[str, str | list[str]]:
    """Turn repeated ``key=value`` options into a mapping.

    A key given more than once collects its values into a list.
    """
    out: dict[str, str | list[str]] = {}
    for raw in values or []:
        key, sep, value = raw.partition("=")
        key = key.strip()
        if not sep or not key:
            console.err(f"Invalid {option} value {raw!r}, expected key=value.")
            raise typer.Exit(code=2)
        if key in out:
            prev = out[key]
            out[key] = [*prev, value] if isinstance(prev, list) else [prev, value]
        else:
            out[key] = value
    return out


def emit_body(body: bytes, *, json_out: bool) -> None:
    if json_out:
        try:
            data = json.loads(body.decode("utf-8"))
        except ValueError:
            console.warn("Response body is not JSON, printing raw.")
        else:
            console.print_json(data)
            return
    sys.stdout.buffer.write(body)
    if body and not body.endswith(b"\n"):
        sys.stdout.buffer.write(b"\n")
    sys.stdout.flush()


@contextlib.contextmanager
def client_errors() -> Iterator[None]:
    try:
        yield
    except HttpStatusError as e:
        console.err(f"HTTP error: {e}")
        raise typer.Exit(code=2)
    except NetworkError as e:
        console.err(f"Network error: {e}")
        raise typer.Exit(code=1)
    except PreconditionError as e:
        console.err(str(e))
        raise typer.Exit(code=1)
