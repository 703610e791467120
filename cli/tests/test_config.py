from bakery_cli import config


def test_save_config_omits_unset_max_delay(tmp_path) -> None:
    cfg = config.AppConfig(
        base_url="http://example.com",
        auth=config.AuthConfig(token="token", role="admin", full_name="Admin"),
    )

    path = config.save_config(cfg)
    contents = tmp_path.joinpath("config.toml").read_text(encoding="utf-8")

    assert path.endswith("config.toml")
    assert "max_delay_s" not in contents
    assert 'role = "admin"' in contents


def test_load_config_reads_request_table(tmp_path) -> None:
    tmp_path.joinpath("config.toml").write_text(
        "\n".join(
            [
                'base_url = "bakery.example.test/"',
                "",
                "[auth]",
                'token = "t"',
                "",
                "[request]",
                "timeout_s = 5",
                "max_retries = -3",
                "retry_delay_s = 0.5",
                "max_delay_s = 4",
                "",
            ]
        ),
        encoding="utf-8",
    )

    cfg = config.load_config()

    assert cfg.base_url == "https://bakery.example.test"
    assert cfg.auth.token == "t"
    assert cfg.request.timeout_s == 5.0
    assert cfg.request.max_retries == 0
    assert cfg.request.retry_delay_s == 0.5
    assert cfg.request.max_delay_s == 4.0


def test_load_config_missing_file_gives_defaults() -> None:
    cfg = config.load_config()
    assert cfg.base_url == "http://localhost:5000"
    assert cfg.auth.token == ""
    assert cfg.request.max_retries == 2


def test_resolve_base_url_env_override(monkeypatch) -> None:
    cfg = config.default_config()
    monkeypatch.setenv(config.ENV_API_BASE_URL, "http://127.0.0.1:8030/")
    assert config.resolve_base_url(cfg) == "http://127.0.0.1:8030"


def test_resolve_base_url_flag_beats_env(monkeypatch) -> None:
    cfg = config.default_config()
    monkeypatch.setenv(config.ENV_API_BASE_URL, "http://env.test")
    assert config.resolve_base_url(cfg, "https://flag.test/") == "https://flag.test"


def test_resolve_base_url_from_config() -> None:
    cfg = config.default_config()
    cfg.base_url = "https://api.bakery.test/"
    assert config.resolve_base_url(cfg) == "https://api.bakery.test"


def test_client_config_carries_request_defaults() -> None:
    cfg = config.default_config()
    cfg.request = config.RequestConfig(timeout_s=10.0, max_retries=1, retry_delay_s=0.2, max_delay_s=1.0)

    client_cfg = config.client_config(cfg, version="1.2.3")

    assert client_cfg.client_version == "1.2.3"
    assert client_cfg.defaults.timeout_s == 10.0
    assert client_cfg.defaults.max_retries == 1
    assert client_cfg.defaults.retry_delay_s == 0.2
    assert client_cfg.defaults.max_delay_s == 1.0


def test_normalize_base_url_defaults_to_https() -> None:
    assert config.normalize_base_url("example.com") == "https://example.com"


def test_normalize_base_url_defaults_to_http_for_localhost() -> None:
    assert config.normalize_base_url("127.0.0.1:8010") == "http://127.0.0.1:8010"


def test_normalize_base_url_strips_trailing_slash() -> None:
    assert config.normalize_base_url("https://example.com/") == "https://example.com"
