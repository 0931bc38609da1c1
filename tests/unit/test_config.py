from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from npm_downloads_client.config import NpmDownloadsClientConfig, RetryConfig, TransportConfig


def test_config_defaults_target_public_registry():
    cfg = NpmDownloadsClientConfig()
    assert cfg.origin == "https://api.npmjs.org"
    assert cfg.base_path == "/downloads"
    assert cfg.retry.max_retries == 3
    assert cfg.retry.delay_seconds == 1.0


def test_config_origin_uses_protocol_and_hostname():
    cfg = NpmDownloadsClientConfig(protocol="http", hostname="localhost:8080")
    assert cfg.origin == "http://localhost:8080"


def test_config_is_immutable():
    cfg = NpmDownloadsClientConfig()
    with pytest.raises(FrozenInstanceError):
        cfg.retry = RetryConfig(max_retries=10)


def test_config_accepts_zero_retries_and_zero_delay():
    NpmDownloadsClientConfig(retry=RetryConfig(max_retries=0, delay_seconds=0.0)).validate()


def test_config_accepts_empty_base_path():
    NpmDownloadsClientConfig(base_path="").validate()


@pytest.mark.parametrize(
    ("kwargs", "message"),
    [
        ({"protocol": "ftp"}, "protocol"),
        ({"hostname": ""}, "hostname"),
        ({"base_path": "downloads"}, "base_path"),
        ({"base_path": "/downloads/"}, "must not end with"),
        ({"base_path": "/"}, "must not end with"),
    ],
)
def test_config_validate_rejects_invalid_endpoint(kwargs, message):
    cfg = NpmDownloadsClientConfig(**kwargs)
    with pytest.raises(ValueError, match=message):
        cfg.validate()


@pytest.mark.parametrize(
    ("section", "field", "value"),
    [
        ("retry", "max_retries", -1),
        ("retry", "delay_seconds", -0.5),
        ("transport", "timeout_connect_seconds", 0.0),
        ("transport", "timeout_read_seconds", 0.0),
        ("transport", "timeout_write_seconds", 0.0),
        ("transport", "timeout_pool_seconds", 0.0),
        ("transport", "max_workers", 0),
    ],
)
def test_config_validate_rejects_invalid_numeric_values(section, field, value):
    kwargs = {field: value}
    cfg = NpmDownloadsClientConfig(
        retry=RetryConfig(**kwargs) if section == "retry" else RetryConfig(),
        transport=TransportConfig(**kwargs) if section == "transport" else TransportConfig(),
    )
    with pytest.raises(ValueError):
        cfg.validate()


def test_config_validate_rejects_non_int_max_retries():
    cfg = NpmDownloadsClientConfig(retry=RetryConfig(max_retries=True))  # type: ignore[arg-type]
    with pytest.raises(ValueError, match="retry.max_retries must be int"):
        cfg.validate()
