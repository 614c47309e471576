from __future__ import annotations

import pytest

from digitalocean_api import DigitalOcean, HttpxTransport
from digitalocean_api.config import ROOT_URL, ClientSettings, load_settings
from digitalocean_api.errors import ConfigError

from .fakes import FakeTransport


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    for name in ("DIGITALOCEAN_TOKEN", "DIGITALOCEAN_API_URL", "DIGITALOCEAN_SECRETS_PATH"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _write_secrets(directory, body: str):
    secrets_dir = directory / ".secrets"
    secrets_dir.mkdir(exist_ok=True)
    path = secrets_dir / "secret.toml"
    path.write_text(body, encoding="utf-8")
    return path


def test_explicit_token_wins(monkeypatch, isolated_environment):
    monkeypatch.setenv("DIGITALOCEAN_TOKEN", "from-env")
    _write_secrets(isolated_environment, '[digitalocean]\ntoken = "from-file"\n')

    assert load_settings("explicit").token == "explicit"


def test_environment_token_beats_secrets_file(monkeypatch, isolated_environment):
    monkeypatch.setenv("DIGITALOCEAN_TOKEN", "from-env")
    _write_secrets(isolated_environment, '[digitalocean]\ntoken = "from-file"\n')

    assert load_settings().token == "from-env"


def test_secrets_file_supplies_token_and_options(isolated_environment):
    _write_secrets(
        isolated_environment,
        '[digitalocean]\ntoken = "from-file"\napi_url = "http://localhost:8080/v2"\ntimeout = 5\nmax_pages = 10\nconnect_attempts = 1\n',
    )

    settings = load_settings()

    assert settings == ClientSettings(
        token="from-file",
        api_url="http://localhost:8080/v2/",
        timeout=5.0,
        max_pages=10,
        connect_attempts=1,
    )


def test_secrets_path_override(monkeypatch, tmp_path):
    path = tmp_path / "elsewhere.toml"
    path.write_text('[digitalocean]\ntoken = "override"\n', encoding="utf-8")
    monkeypatch.setenv("DIGITALOCEAN_SECRETS_PATH", str(path))

    assert load_settings().token == "override"


def test_environment_api_url_overrides_file(monkeypatch, isolated_environment):
    _write_secrets(isolated_environment, '[digitalocean]\ntoken = "t"\napi_url = "http://file/v2"\n')
    monkeypatch.setenv("DIGITALOCEAN_API_URL", "http://env/v2/")

    assert load_settings().api_url == "http://env/v2/"


def test_defaults_without_overrides():
    settings = load_settings("t")

    assert settings.api_url == ROOT_URL
    assert settings.timeout == 30.0
    assert settings.max_pages is None
    assert settings.connect_attempts == 3


def test_missing_token_raises_unless_lenient():
    with pytest.raises(ConfigError):
        load_settings()

    assert load_settings(strict=False).token == ""


def test_malformed_secrets_file_raises(isolated_environment):
    _write_secrets(isolated_environment, "[digitalocean\ntoken = ")

    with pytest.raises(ConfigError):
        load_settings()


@pytest.mark.parametrize("body", ['timeout = "slow"', "max_pages = 1.5", "connect_attempts = true"])
def test_invalid_option_types_raise(isolated_environment, body):
    _write_secrets(isolated_environment, f'[digitalocean]\ntoken = "t"\n{body}\n')

    with pytest.raises(ConfigError):
        load_settings()


def test_max_pages_must_be_positive():
    with pytest.raises(ConfigError):
        ClientSettings(token="t", max_pages=0)


def test_from_env_builds_connection(monkeypatch):
    monkeypatch.setenv("DIGITALOCEAN_TOKEN", "from-env")
    transport = FakeTransport()

    with DigitalOcean.from_env(transport=transport) as connection:
        assert connection.settings.token == "from-env"

    assert not transport.closed


def test_connection_closes_transport_it_created():
    connection = DigitalOcean.from_token("t", timeout=3.0)
    assert isinstance(connection.transport, HttpxTransport)
    assert connection.transport.timeout == 3.0

    connection.close()

    assert connection.transport._client.is_closed
