"""Tests for config.py."""
from pathlib import Path

import pytest
from pydantic import ValidationError

from searchsuite_client.config import ENV_PREFIX, Config, get_config


class TestConfig:
    def test_defaults(self) -> None:
        config = Config()
        assert config.es_hosts == ["http://localhost:9200"]
        assert config.timeout == 30.0
        assert config.connection_timeout == 5.0
        assert config.verify_certs is True
        assert config.max_retries == 3

    def test_frozen(self) -> None:
        config = Config()
        with pytest.raises(ValidationError):
            config.timeout = 1.0  # type: ignore[misc]

    @pytest.mark.parametrize("field", ["timeout", "connection_timeout"])
    def test_timeouts_must_be_positive(self, field: str) -> None:
        with pytest.raises(ValidationError):
            Config(**{field: 0})

    def test_password_requires_user(self) -> None:
        with pytest.raises(ValidationError, match="es_password is set without es_user"):
            Config(es_password="changeme")

    def test_password_without_user_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(f"{ENV_PREFIX}_ES_PASSWORD", "changeme")
        with pytest.raises(ValidationError):
            get_config()

    def test_default_hosts_not_shared(self) -> None:
        assert Config().es_hosts is not Config().es_hosts


class TestGetOptions:
    def test_minimal_options(self) -> None:
        assert Config().get_options() == {
            "hosts": ["http://localhost:9200"],
            "verify_certs": True,
            "max_retries": 3,
        }

    def test_options_do_not_carry_timeouts(self) -> None:
        options = Config(timeout=1.0, connection_timeout=2.0).get_options()
        assert "timeout" not in options
        assert "request_timeout" not in options

    def test_basic_auth(self) -> None:
        options = Config(es_user="elastic", es_password="changeme").get_options()
        assert options["basic_auth"] == ("elastic", "changeme")

    def test_basic_auth_without_password(self) -> None:
        options = Config(es_user="elastic").get_options()
        assert options["basic_auth"] == ("elastic", "")

    def test_api_key_and_ca_certs(self, tmp_path: Path) -> None:
        ca_certs = tmp_path / "ca.crt"
        options = Config(es_api_key="c2VjcmV0", ca_certs=ca_certs).get_options()
        assert options["api_key"] == "c2VjcmV0"
        assert options["ca_certs"] == str(ca_certs)
        assert "basic_auth" not in options

    def test_options_are_a_copy(self) -> None:
        config = Config()
        config.get_options()["hosts"].append("http://other:9200")
        assert config.es_hosts == ["http://localhost:9200"]


class TestGetConfig:
    def test_without_env(self) -> None:
        assert get_config() == Config()

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv(f"{ENV_PREFIX}_ES_HOSTS", "http://es1:9200, http://es2:9200,")
        monkeypatch.setenv(f"{ENV_PREFIX}_ES_USER", "elastic")
        monkeypatch.setenv(f"{ENV_PREFIX}_ES_PASSWORD", "changeme")
        monkeypatch.setenv(f"{ENV_PREFIX}_VERIFY_CERTS", "false")
        monkeypatch.setenv(f"{ENV_PREFIX}_MAX_RETRIES", "5")
        monkeypatch.setenv(f"{ENV_PREFIX}_TIMEOUT", "12.5")
        monkeypatch.setenv(f"{ENV_PREFIX}_CONNECTION_TIMEOUT", "2")
        monkeypatch.setenv(f"{ENV_PREFIX}_RESULT_DIR", str(tmp_path))
        monkeypatch.setenv(f"{ENV_PREFIX}_DEBUG", "true")

        config = get_config()

        assert config.es_hosts == ["http://es1:9200", "http://es2:9200"]
        assert config.es_user == "elastic"
        assert config.es_password == "changeme"
        assert config.verify_certs is False
        assert config.max_retries == 5
        assert config.timeout == 12.5
        assert config.connection_timeout == 2.0
        assert config.result_dir == tmp_path
        assert config.debug is True

    def test_invalid_env_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(f"{ENV_PREFIX}_TIMEOUT", "soon")
        with pytest.raises(ValidationError):
            get_config()
