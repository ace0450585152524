from __future__ import annotations

import os

import typer

from .. import console
from ..config import config_path, default_config, load_config, normalize_base_url, save_config

app = typer.Typer(help="Manage local settings (~/.config/resthttp/config.toml).")


@app.command("init")
def init_settings(
        force: bool = typer.Option(False, "--force", help="Overwrite existing config."),
        base_url: str = typer.Option(
            ...,
            "--base-url",
            prompt="API base URL",
            help="API base URL like http://127.0.0.1:8080",
        ),
        username: str = typer.Option("", "--username", help="Basic auth user."),
        password: str = typer.Option("", "--password", help="Basic auth password.", hide_input=True),
):
    path = config_path()
    if os.path.exists(path) and not force:
        console.info(f"Config already exists: {path}")
        console.info("Use --force to overwrite.")
        return

    cfg = default_config()
    cfg.base_url = normalize_base_url(base_url, warn=True)
    if not cfg.base_url:
        console.err("Base URL cannot be empty.")
        raise typer.Exit(code=2)
    cfg.auth.username = username
    cfg.auth.password = password
    saved = save_config(cfg)
    console.ok(f"Config written: {saved}")


@app.command("show")
def show_settings():
    cfg = load_config()
    password_state = "(set)" if cfg.auth.password else "(empty)"
    console.print(
        f"base_url={cfg.base_url} username={cfg.auth.username or '(empty)'} password={password_state} "
        f"verify_ssl={str(cfg.verify_ssl).lower()} timeout_s={cfg.timeout_s}",
        markup=False,
    )


@app.command("set")
def set_setting(
        base_url: str | None = typer.Option(None, "--base-url", help="Set API base URL."),
        username: str | None = typer.Option(None, "--username", help="Set basic auth user."),
        password: str | None = typer.Option(None, "--password", help="Set basic auth password."),
        verify_ssl: bool | None = typer.Option(None, "--verify-ssl/--no-verify-ssl", help="TLS verification."),
        timeout_s: float | None = typer.Option(None, "--timeout", help="Request timeout in seconds."),
):
    cfg = load_config()
    if base_url is not None:
        cfg.base_url = normalize_base_url(base_url, warn=True)
    if username is not None:
        cfg.auth.username = username
    if password is not None:
        cfg.auth.password = password
    if verify_ssl is not None:
        cfg.verify_ssl = verify_ssl
    if timeout_s is not None:
        if timeout_s <= 0:
            console.err("Timeout must be positive.")
            raise typer.Exit(code=2)
        cfg.timeout_s = timeout_s
    saved = save_config(cfg)
    console.ok(f"Settings updated: {saved}")
