from resthttp_cli import config


def test_save_config_round_trips_auth(tmp_path, monkeypatch) -> None:
    def _config_dir(_: str) -> str:
        return str(tmp_path)

    monkeypatch.setattr(config, "user_config_dir", _config_dir)
    cfg = config.AppConfig(
        base_url="http://example.com",
        auth=config.AuthConfig(username="u", password="p"),
        verify_ssl=False,
        timeout_s=3.5,
    )

    path = config.save_config(cfg)
    loaded = config.load_config()

    assert path.endswith("config.toml")
    assert loaded.base_url == "http://example.com"
    assert loaded.auth.username == "u"
    assert loaded.auth.password == "p"
    assert loaded.verify_ssl is False
    assert loaded.timeout_s == 3.5


def test_load_config_missing_file_returns_default(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(config, "user_config_dir", lambda _: str(tmp_path / "absent"))
    assert config.load_config() == config.default_config()


def test_invalid_timeout_falls_back_to_default() -> None:
    cfg = config.from_toml({"base_url": "http://x.test", "timeout_s": "soon"})
    assert cfg.timeout_s == config.DEFAULT_TIMEOUT_S


def test_resolve_base_url_env_override(monkeypatch) -> None:
    cfg = config.default_config()
    monkeypatch.setenv(config.ENV_BASE_URL, "http://127.0.0.1:9000/")
    assert config.resolve_base_url(cfg) == "http://127.0.0.1:9000"
    assert config.resolve_base_url(cfg, "https://cli.test/") == "https://cli.test"


def test_normalize_base_url_defaults_to_https() -> None:
    assert config.normalize_base_url("example.com") == "https://example.com"


def test_normalize_base_url_defaults_to_http_for_localhost() -> None:
    assert config.normalize_base_url("localhost:8080") == "http://localhost:8080"


def test_normalize_base_url_strips_trailing_slash() -> None:
    assert config.normalize_base_url("https://example.com/") == "https://example.com"


def test_normalize_base_url_loopback_range_uses_http() -> None:
    assert config.normalize_base_url("127.0.0.5/api/") == "http://127.0.0.5/api"


def test_normalize_base_url_keeps_explicit_scheme() -> None:
    assert config.normalize_base_url("http://example.com//") == "http://example.com"
    assert config.normalize_base_url("  ") == ""
