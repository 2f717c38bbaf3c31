from __future__ import annotations

import pytest

from pyeomini.config import EoMiniConfig
from pyeomini.exceptions import EoMiniConfigError


def test_defaults() -> None:
    config = EoMiniConfig(username="u", password="p")

    assert config.base_url == "https://eoappi.eocharging.com"
    assert config.refresh_rate == 60.0
    assert config.poll_interval == 1.0
    assert config.request_timeout == 30.0
    assert config.revert_debounce == 0.15
    assert config.validate() is config


@pytest.mark.parametrize(
    ("kwargs", "message"),
    [
        ({"username": "", "password": "p"}, "Missing username"),
        ({"username": "u", "password": ""}, "Missing password"),
        ({"username": "u", "password": "p", "refresh_rate": 0}, "refresh_rate must be positive"),
        ({"username": "u", "password": "p", "request_timeout": -1}, "request_timeout must be positive"),
        ({"username": "u", "password": "p", "revert_debounce": -0.1}, "revert_debounce must not be negative"),
    ],
)
def test_validate_rejects(kwargs: dict[str, object], message: str) -> None:
    with pytest.raises(EoMiniConfigError, match=message):
        EoMiniConfig(**kwargs).validate()  # type: ignore[arg-type]


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EOMINI_USERNAME", "env-user")
    monkeypatch.setenv("EOMINI_PASSWORD", "env-pass")
    monkeypatch.setenv("EOMINI_BASE_URL", "https://example.invalid")
    monkeypatch.setenv("EOMINI_REFRESH_RATE", "120")
    monkeypatch.setenv("EOMINI_REQUEST_TIMEOUT", "5.5")

    config = EoMiniConfig.from_env()

    assert config.username == "env-user"
    assert config.password == "env-pass"
    assert config.base_url == "https://example.invalid"
    assert config.refresh_rate == 120.0
    assert config.request_timeout == 5.5
    assert config.poll_interval == 1.0


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EOMINI_USERNAME", "env-user")
    monkeypatch.setenv("EOMINI_REFRESH_RATE", "not-a-number")

    config = EoMiniConfig.from_env(username="explicit", password="pw", refresh_rate=10.0)

    assert config.username == "explicit"
    assert config.refresh_rate == 10.0


def test_from_env_bad_number(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EOMINI_POLL_INTERVAL", "fast")

    with pytest.raises(EoMiniConfigError, match="EOMINI_POLL_INTERVAL"):
        EoMiniConfig.from_env()


def test_from_env_missing_credentials_fail_validation(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EOMINI_USERNAME", raising=False)
    monkeypatch.delenv("EOMINI_PASSWORD", raising=False)

    with pytest.raises(EoMiniConfigError):
        EoMiniConfig.from_env().validate()
