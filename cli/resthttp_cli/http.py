from __future__ import annotations

from dataclasses import dataclass

from resthttp import RestClient
from resthttp.config_types import ClientConfig

from .config import AppConfig, apply_profile, load_config, resolve_base_url


def make_client(
    cfg: AppConfig,
    *,
    profile: str | None,
    base_url_override: str | None,
    insecure: bool = False,
    timeout_s: float | None = None,
    debug: bool = False,
) -> RestClient:
    effective_cfg = apply_profile(cfg, profile)
    base_url = resolve_base_url(effective_cfg, base_url_override)
    return RestClient(
        ClientConfig(
            base_url=base_url,
            username=effective_cfg.auth.username,
            password=effective_cfg.auth.password,
            verify_ssl=effective_cfg.verify_ssl and not insecure,
            debug=debug,
            timeout_s=timeout_s or effective_cfg.timeout_s,
        )
    )


@dataclass
class CliOptions:
    profile: str | None = None
    base_url: str | None = None
    insecure: bool = False
    timeout_s: float | None = None
    debug: bool = False


def client_for(opts: CliOptions | None) -> RestClient:
    opts = opts or CliOptions()
    return make_client(
        load_config(),
        profile=opts.profile,
        base_url_override=opts.base_url,
        insecure=opts.insecure,
        timeout_s=opts.timeout_s,
        debug=opts.debug,
    )
