from __future__ import annotations

import typer

from .. import console
from ..http import client_for
from .common import client_errors, emit_body, parse_pairs

QUERY_HELP = "Query item key=value (repeatable)."
PARAM_HELP = "Form parameter key=value (repeatable)."


def head(
        ctx: typer.Context,
        container: str = typer.Argument(..., help="Container path segment."),
        resource: str = typer.Argument("", help="Resource path segment."),
):
    """Send HEAD and print the status code."""
    client = client_for(ctx.obj)
    try:
        with client_errors():
            status = client.head(container, resource)
    finally:
        client.close()
    console.print(str(status))


def get(
        ctx: typer.Context,
        container: str = typer.Argument(..., help="Container path segment."),
        resource: str = typer.Argument("", help="Resource path segment."),
        query: list[str] = typer.Option(None, "-q", "--query", help=QUERY_HELP),
        accept: str = typer.Option("", "--accept", help="Accept header for this request."),
        json_out: bool = typer.Option(False, "--json", help="Pretty-print a JSON body."),
):
    """Send GET and print the body."""
    items = parse_pairs(query, option="--query")
    client = client_for(ctx.obj)
    try:
        with client_errors():
            body = client.get(container, resource, items, accept)
    finally:
        client.close()
    emit_body(body, json_out=json_out)


def delete(
        ctx: typer.Context,
        container: str = typer.Argument(..., help="Container path segment."),
        resource: str = typer.Argument("", help="Resource path segment."),
        query: list[str] = typer.Option(None, "-q", "--query", help=QUERY_HELP),
        accept: str = typer.Option("", "--accept", help="Accept header for this request."),
        json_out: bool = typer.Option(False, "--json", help="Pretty-print a JSON body."),
):
    """Send DELETE and print the body."""
    items = parse_pairs(query, option="--query")
    client = client_for(ctx.obj)
    try:
        with client_errors():
            body = client.delete(container, resource, items, accept)
    finally:
        client.close()
    emit_body(body, json_out=json_out)


def post(
        ctx: typer.Context,
        container: str = typer.Argument(..., help="Container path segment."),
        resource: str = typer.Argument("", help="Resource path segment."),
        param: list[str] = typer.Option(None, "-p", "--param", help=PARAM_HELP),
        accept: str = typer.Option("", "--accept", help="Accept header for this request."),
        json_out: bool = typer.Option(False, "--json", help="Pretty-print a JSON body."),
):
    """Send a form-encoded POST and print the body."""
    params = parse_pairs(param, option="--param")
    client = client_for(ctx.obj)
    try:
        with client_errors():
            body = client.post(container, resource, params, accept)
    finally:
        client.close()
    emit_body(body, json_out=json_out)


def put(
        ctx: typer.Context,
        container: str = typer.Argument(..., help="Container path segment."),
        resource: str = typer.Argument("", help="Resource path segment."),
        param: list[str] = typer.Option(None, "-p", "--param", help=PARAM_HELP),
        accept: str = typer.Option("", "--accept", help="Accept header for this request."),
        json_out: bool = typer.Option(False, "--json", help="Pretty-print a JSON body."),
):
    """Send a form-encoded PUT and print the body."""
    params = parse_pairs(param, option="--param")
    client = client_for(ctx.obj)
    try:
        with client_errors():
            body = client.put(container, resource, params, accept)
    finally:
        client.close()
    emit_body(body, json_out=json_out)
