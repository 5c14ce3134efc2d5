import logging

import pytest

from pitypull.logging_config import LOG_LEVEL_ENV_VAR, configure_logging, resolve_level


@pytest.fixture
def package_logger():
    logger = logging.getLogger("pitypull")
    old = logger.level
    yield logger
    logger.setLevel(old)


def test_default_level_used_without_env(monkeypatch, package_logger):
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)
    assert configure_logging(logging.INFO) == logging.INFO
    assert package_logger.level == logging.INFO


def test_env_overrides_default(monkeypatch, package_logger):
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "debug")
    assert configure_logging(logging.WARNING) == logging.DEBUG
    assert package_logger.level == logging.DEBUG


def test_unknown_level_name_falls_back(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "chatty")
    assert resolve_level(logging.ERROR) == logging.ERROR


def test_only_package_logger_is_changed(monkeypatch, package_logger):
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)
    other = logging.getLogger("jsonschema")
    before = other.level
    configure_logging(logging.DEBUG)
    assert other.level == before
