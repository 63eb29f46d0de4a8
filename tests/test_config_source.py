"""
Tests for src/config/source.py

Covers layer precedence (defaults < .env file < environment), optional
override files and the process-wide default source.
"""

import os

from src.config.source import (
    DEFAULTS,
    ConfigSource,
    default_source,
    load_override_file,
    reset_default_source,
)


def test_get_falls_back_to_documented_default():
    source = ConfigSource(env_file=None, environ={})

    assert source.get("APP_ENV") == "dev"
    assert source.get("LOG_LEVEL") == "INFO"
    assert source.get("RISK_MAX_PER_TRADE") == "0.01"
    assert source.get("DEBUG_MODE") == "false"


def test_get_unknown_key_is_empty_string():
    source = ConfigSource(env_file=None, environ={})

    assert source.get("NOT_A_REAL_KEY") == ""
    assert source.raw("NOT_A_REAL_KEY") is None


def test_file_overrides_default(make_source):
    source = make_source(env_file="APP_ENV=staging\n")

    assert source.get("APP_ENV") == "staging"


def test_environment_overrides_file(make_source):
    source = make_source({"APP_ENV": "production"}, env_file="APP_ENV=staging\n")

    assert source.get("APP_ENV") == "production"


def test_get_layers_file_over_defaults(make_source):
    source = make_source(env_file="LOG_LEVEL=DEBUG\nEXTRA_KEY=1\n")

    assert source.get("LOG_LEVEL") == "DEBUG"
    assert source.get("EXTRA_KEY") == "1"
    assert source.get("APP_ENV") == DEFAULTS["APP_ENV"]
    assert source.raw("APP_ENV") is None


def test_missing_override_file_is_not_an_error(tmp_path):
    source = ConfigSource(env_file=tmp_path / "does-not-exist.env", environ={})

    assert source.file_values() == {}
    assert source.get("APP_ENV") == "dev"


def test_override_file_tolerates_quotes_comments_and_export(tmp_path):
    env_path = tmp_path / ".env"
    env_path.write_text(
        "# service settings\n"
        "export FKS_SERVICE_NAME=\"quoted service\"\n"
        "DATABASE_PASSWORD='s3cr3t'\n"
        "BARE_KEY\n"
        "\n",
        encoding="utf-8",
    )

    values = load_override_file(env_path)

    assert values["FKS_SERVICE_NAME"] == "quoted service"
    assert values["DATABASE_PASSWORD"] == "s3cr3t"
    assert "BARE_KEY" not in values


def test_override_file_is_parsed_once(tmp_path):
    env_path = tmp_path / ".env"
    env_path.write_text("APP_ENV=first\n", encoding="utf-8")
    source = ConfigSource(env_file=env_path, environ={})

    assert source.get("APP_ENV") == "first"

    # Later edits are not picked up by the same source
    env_path.write_text("APP_ENV=second\n", encoding="utf-8")
    assert source.get("APP_ENV") == "first"

    # A new source reads the file again
    assert ConfigSource(env_file=env_path, environ={}).get("APP_ENV") == "second"


def test_loading_file_does_not_touch_os_environ(tmp_path, monkeypatch):
    monkeypatch.delenv("FKS_SOURCE_TEST_ONLY", raising=False)
    env_path = tmp_path / ".env"
    env_path.write_text("FKS_SOURCE_TEST_ONLY=from-file\n", encoding="utf-8")

    source = ConfigSource(env_file=env_path, environ={})
    assert source.get("FKS_SOURCE_TEST_ONLY") == "from-file"
    assert "FKS_SOURCE_TEST_ONLY" not in os.environ


def test_live_environment_is_read_on_every_lookup(monkeypatch):
    source = ConfigSource(env_file=None)

    monkeypatch.setenv("APP_ENV", "one")
    assert source.get("APP_ENV") == "one"

    monkeypatch.setenv("APP_ENV", "two")
    assert source.get("APP_ENV") == "two"


def test_lookup_prefers_environment_over_file_across_aliases(make_source):
    # FKS_ENVIRONMENT is the primary alias but only in the file;
    # APP_ENV comes from the live environment and wins.
    source = make_source({"APP_ENV": "dev"}, env_file="FKS_ENVIRONMENT=production\n")

    assert source.lookup("FKS_ENVIRONMENT", "APP_ENV") == ("APP_ENV", "dev")


def test_lookup_uses_alias_order_within_a_layer(make_source):
    source = make_source({"APP_ENV": "dev", "FKS_ENVIRONMENT": "staging"})

    assert source.lookup("FKS_ENVIRONMENT", "APP_ENV") == ("FKS_ENVIRONMENT", "staging")
    assert source.lookup("UNSET_A", "UNSET_B") is None


def test_default_source_is_shared_until_reset(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("LOG_LEVEL=WARNING\n", encoding="utf-8")
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    first = default_source()
    assert default_source() is first
    assert first.get("LOG_LEVEL") == "WARNING"

    reset_default_source()
    assert default_source() is not first
