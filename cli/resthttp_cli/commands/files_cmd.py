from __future__ import annotations

from pathlib import Path

import typer
from resthttp import PreconditionError, SourceFileNotFound

from .. import console
from ..http import client_for
from .common import client_errors, emit_body, parse_pairs


def download(
        ctx: typer.Context,
        container: str = typer.Argument(..., help="Container path segment."),
        resource: str = typer.Argument(..., help="Resource path to fetch."),
        out: str = typer.Option("", "-o", "--out", help="Destination file (default: last resource segment)."),
        query: list[str] = typer.Option(None, "-q", "--query", help="Query item key=value (repeatable)."),
        accept: str = typer.Option("", "--accept", help="Accept header for this request."),
):
    """Stream a resource to a local file."""
    items = parse_pairs(query, option="--query")
    client = client_for(ctx.obj)
    try:
        with client_errors():
            dest = client.download(container, resource, out, accept, items)
    finally:
        client.close()
    console.ok(f"Downloaded {dest}")


def _split_file_spec(spec: str) -> tuple[str, str]:
    src, sep, name = spec.partition("=")
    return src, name if sep else ""


def upload(
        ctx: typer.Context,
        container: str = typer.Argument(..., help="Container path segment."),
        files: list[str] = typer.Option(..., "-f", "--file", help="SRC[=NAME] file to upload (repeatable)."),
        resource: str = typer.Option("", "--resource", help="Resource segment for a single upload with fields."),
        param: list[str] = typer.Option(None, "-p", "--param", help="Extra form field key=value (single file only)."),
        content_type: str = typer.Option("", "--content-type", help="Content type of the file part(s)."),
        json_out: bool = typer.Option(False, "--json", help="Pretty-print a JSON body."),
):
    """Upload one or more files as multipart/form-data."""
    fields = parse_pairs(param, option="--param")
    specs = [_split_file_spec(spec) for spec in files]
    if len(specs) > 1 and (fields or resource):
        console.err("--param and --resource are only supported with a single --file.")
        raise typer.Exit(code=2)

    client = client_for(ctx.obj)
    try:
        with client_errors():
            if len(specs) > 1:
                body = client.upload_files(container, dict(specs), content_type)
            elif fields or resource:
                src, name = specs[0]
                body = _upload_with_fields(client, container, resource, src, name, fields, content_type)
            else:
                src, name = specs[0]
                body = client.upload_path(container, src, name, content_type)
    finally:
        client.close()
    emit_body(body, json_out=json_out)


def _upload_with_fields(client, container, resource, src, name, fields, content_type) -> bytes:
    path = Path(src)
    if name and name != path.name:
        console.warn("NAME is ignored when --param or --resource is given; the source file name is sent.")
    try:
        f = path.open("rb")
    except FileNotFoundError as e:
        raise SourceFileNotFound(src) from e
    except OSError as e:
        raise PreconditionError(f"could not open file: {e}", path=src) from e
    with f:
        return client.upload_file(container, resource, f, fields, content_type)
