from __future__ import annotations

import typer
from resthttp import RestClient

from .. import console
from .common import client_errors

DEMO_BASE_URL = "https://jsonplaceholder.typicode.com"


def run_demo(client: RestClient) -> list[tuple[str, bytes]]:
    """Walk the verb helpers against a JSON placeholder style API."""
    steps: list[tuple[str, bytes]] = []
    steps.append(("GET posts/1", client.get("posts", "1", accept="application/json")))
    steps.append((
        "POST posts/",
        client.post("posts", params={"title": "My Title", "body": "My Body", "userId": "1"}, accept="application/json"),
    ))
    steps.append((
        "PUT posts/1",
        client.put("posts", "1", {"title": "Updated Title", "body": "Updated Body", "userId": "1"}, "application/json"),
    ))
    steps.append(("DELETE posts/1", client.delete("posts", "1", accept="application/json")))
    steps.append(("GET photos/1", client.get("photos", "1", accept="application/json")))
    return steps


def demo(
        ctx: typer.Context,
        base_url: str = typer.Option(DEMO_BASE_URL, "--demo-url", help="Placeholder API to exercise."),
):
    """Replay a GET/POST/PUT/DELETE sequence and print each response."""
    opts = ctx.obj
    client = RestClient.create(
        base_url,
        verify_ssl=not (opts and opts.insecure),
        debug=bool(opts and opts.debug),
        timeout_s=(opts and opts.timeout_s) or 10.0,
    )
    try:
        with client_errors():
            steps = run_demo(client)
    finally:
        client.close()
    for label, body in steps:
        console.rule(label)
        console.print(body.decode("utf-8", errors="replace"), markup=False)
