from __future__ import annotations

import typer

from .commands import demo_cmd, files_cmd, requests_cmd, settings_cmd
from .http import CliOptions
from .logging_ import enable_request_dump, setup_logging


def _build_app() -> typer.Typer:
    app = typer.Typer(
        name="resthttp",
        help="Small REST client for container/resource style APIs.",
        no_args_is_help=True,
    )

    app.add_typer(settings_cmd.app, name="settings")
    app.command("head")(requests_cmd.head)
    app.command("get")(requests_cmd.get)
    app.command("post")(requests_cmd.post)
    app.command("put")(requests_cmd.put)
    app.command("delete")(requests_cmd.delete)
    app.command("download")(files_cmd.download)
    app.command("upload")(files_cmd.upload)
    app.command("demo")(demo_cmd.demo)

    @app.callback()
    def _main(
            ctx: typer.Context,
            base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
            profile: str | None = typer.Option(None, "--profile", help="Config profile to use."),
            insecure: bool = typer.Option(False, "-k", "--insecure", help="Skip TLS certificate verification."),
            timeout_s: float | None = typer.Option(None, "--timeout", help="Request timeout in seconds."),
            debug: bool = typer.Option(False, "--debug", help="Dump each request."),
            verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logs."),
    ):
        setup_logging(verbose)
        if debug:
            enable_request_dump()
        ctx.obj = CliOptions(
            profile=profile,
            base_url=base_url,
            insecure=insecure,
            timeout_s=timeout_s,
            debug=debug,
        )

    return app


app = _build_app()
