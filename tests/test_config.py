import json

import pytest

from fraudquery.core.adapters.config_adapter import (
    EnvConfigRepository,
    FileConfigRepository,
    bootstrap_config_repository,
    create_config_repository,
    parse_properties,
)
from fraudquery.core.domain.errors import ConfigurationError
from fraudquery.core.ports.outbound.config import RepositoryKind
from fraudquery.settings import GatewaySettings, parse_timeout


class _DictRepository:
    def __init__(self, properties: dict[str, str]) -> None:
        self._properties = properties

    def get_property(self, name: str, default=None):
        return self._properties.get(name, default)


def test_parse_properties() -> None:
    text = "\n".join(
        [
            "# comment",
            "! also a comment",
            "nats.host = nats.internal",
            "nats.port:4333",
            "fraud.query.topic fraud.lookup",
            "long.value = first \\",
            "    second",
            "empty.value=",
        ]
    )

    assert parse_properties(text) == {
        "nats.host": "nats.internal",
        "nats.port": "4333",
        "fraud.query.topic": "fraud.lookup",
        "long.value": "first second",
        "empty.value": "",
    }


def test_file_repository_properties(tmp_path) -> None:
    path = tmp_path / "application.properties"
    path.write_text("nats.host=broker\nfraud.query.timeout=5s\n", encoding="utf-8")

    repo = FileConfigRepository(path)
    repo.load()

    assert repo.get_property("nats.host") == "broker"
    assert repo.get_property("fraud.query.timeout") == "5s"
    assert repo.get_property("missing", "fallback") == "fallback"


def test_file_repository_yaml_is_flattened(tmp_path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("nats:\n  host: broker\n  port: 4333\nfraud:\n  query:\n    topic: t\n", encoding="utf-8")

    repo = FileConfigRepository(path)
    repo.load()

    assert repo.get_property("nats.host") == "broker"
    assert repo.get_property("nats.port") == "4333"
    assert repo.get_property("fraud.query.topic") == "t"


def test_file_repository_json(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"nats": {"url": "nats://a:1"}}), encoding="utf-8")

    repo = FileConfigRepository(path)
    repo.load()

    assert repo.get_property("nats.url") == "nats://a:1"


def test_file_repository_missing_file_is_empty(tmp_path) -> None:
    repo = FileConfigRepository(tmp_path / "absent.properties")
    repo.load()

    assert repo.get_property("nats.host", "localhost") == "localhost"


def test_file_repository_unsupported_format(tmp_path) -> None:
    path = tmp_path / "config.toml"
    path.write_text("x = 1", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="Unsupported config format"):
        FileConfigRepository(path).load()


def test_env_repository() -> None:
    repo = EnvConfigRepository(
        environ={"FRAUDQUERY_NATS_HOST": "env-broker", "OTHER": "x"},
    )
    repo.load()

    assert repo.env_name("fraud.query.timeout") == "FRAUDQUERY_FRAUD_QUERY_TIMEOUT"
    assert repo.get_property("nats.host") == "env-broker"
    assert repo.get_property("nats.port", "4222") == "4222"


def test_create_config_repository_kinds(tmp_path) -> None:
    assert isinstance(create_config_repository("file", path=tmp_path / "a"), FileConfigRepository)
    assert isinstance(create_config_repository(" ENV "), EnvConfigRepository)
    assert isinstance(create_config_repository(RepositoryKind.ENV), EnvConfigRepository)


def test_create_config_repository_rejects_unknown_kind() -> None:
    with pytest.raises(ConfigurationError, match="Unknown config repository"):
        create_config_repository("ma.s2m.repository.PropertiesRepository")


def test_bootstrap_uses_local_file_selection(tmp_path, monkeypatch) -> None:
    path = tmp_path / "application.properties"
    path.write_text("app.config.repository=env\nnats.host=file-broker\n", encoding="utf-8")
    monkeypatch.setenv("FRAUDQUERY_NATS_HOST", "env-broker")

    repo = bootstrap_config_repository(path)

    assert isinstance(repo, EnvConfigRepository)
    assert repo.get_property("nats.host") == "env-broker"


def test_bootstrap_defaults_to_file(tmp_path) -> None:
    path = tmp_path / "application.properties"
    path.write_text("nats.host=file-broker\n", encoding="utf-8")

    repo = bootstrap_config_repository(path)

    assert repo.get_property("nats.host") == "file-broker"


@pytest.mark.parametrize(
    "text, seconds",
    [("5s", 5.0), ("1S", 1.0), ("0.5s", 0.5), ("1m30s", 90.0), ("2h", 7200.0), ("500ms", 0.5), ("PT3S", 3.0)],
)
def test_parse_timeout(text: str, seconds: float) -> None:
    assert parse_timeout(text) == seconds


@pytest.mark.parametrize("text", ["", "soon", "5", "0s", "1d"])
def test_parse_timeout_rejects_invalid(text: str) -> None:
    with pytest.raises(ConfigurationError):
        parse_timeout(text)


def test_settings_defaults() -> None:
    settings = GatewaySettings.from_repository(_DictRepository({}))

    assert settings.nats_url == "nats://localhost:4222"
    assert settings.topic == "fraud.query"
    assert settings.timeout == 1.0
    assert settings.http_port == 8080


def test_settings_from_properties() -> None:
    settings = GatewaySettings.from_repository(
        _DictRepository(
            {
                "nats.host": "broker",
                "nats.port": "4333",
                "fraud.query.topic": "fraud.lookup",
                "fraud.query.timeout": "5s",
                "http.port": "9090",
                "log.format": "JSON",
            }
        )
    )

    assert settings.nats_url == "nats://broker:4333"
    assert settings.topic == "fraud.lookup"
    assert settings.timeout == 5.0
    assert settings.http_port == 9090
    assert settings.log_format == "json"


def test_settings_nats_url_takes_precedence() -> None:
    settings = GatewaySettings.from_repository(
        _DictRepository({"nats.url": "nats://a:1", "nats.host": "ignored"})
    )

    assert settings.nats_url == "nats://a:1"


def test_settings_invalid_port() -> None:
    with pytest.raises(ConfigurationError, match="nats.port"):
        GatewaySettings.from_repository(_DictRepository({"nats.port": "abc"}))


def test_settings_blank_topic_is_configuration_error() -> None:
    with pytest.raises(ConfigurationError, match="topic"):
        GatewaySettings.from_repository(_DictRepository({"fraud.query.topic": "   "}))
