import os

import pytest
from pydantic import ValidationError

from drivers.config import ConnectionConfig
from utils.env_loader import load_environments, parse_env_file

_DB_VARS = ("DB_ENGINE", "DB_HOST", "DB_NAME", "DB_USER", "DB_PASSWORD", "DB_PORT", "SQLITE_DB_PATH")


@pytest.fixture()
def clean_env(monkeypatch, tmp_path):
    for key in _DB_VARS:
        # setenv first so values written by load_environments are undone too
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    # keep a stray .env in the repo root from leaking into the tests
    monkeypatch.chdir(tmp_path)
    return monkeypatch


def test_parse_env_file_skips_comments_and_strips_quotes(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# comment\n\nDB_HOST='db.local'\nexport DB_USER=\"app\"\nnot a pair\nDB_PORT=3307\n",
        encoding="utf-8",
    )
    assert parse_env_file(str(env_file)) == {"DB_HOST": "db.local", "DB_USER": "app", "DB_PORT": "3307"}
    assert parse_env_file(str(tmp_path / "missing.env")) == {}


def test_load_environments_does_not_override_process_env(clean_env, tmp_path):
    (tmp_path / ".env").write_text("DB_HOST=from-file\nDB_NAME=shop\n", encoding="utf-8")
    clean_env.setenv("DB_HOST", "from-process")
    load_environments()
    assert os.environ["DB_HOST"] == "from-process"
    assert os.environ["DB_NAME"] == "shop"

    load_environments(override=True)
    assert os.environ["DB_HOST"] == "from-file"


def test_config_is_frozen_and_hides_password():
    config = ConnectionConfig(host="localhost", dbname="shop", user="app", password="s3cret")
    assert "s3cret" not in repr(config)
    with pytest.raises(ValidationError):
        config.host = "elsewhere"


def test_config_rejects_bad_port():
    with pytest.raises(ValidationError):
        ConnectionConfig(host="localhost", dbname="shop", user="app", port=0)


def test_from_env_reads_server_settings(clean_env):
    clean_env.setenv("DB_HOST", "db")
    clean_env.setenv("DB_NAME", "shop")
    clean_env.setenv("DB_USER", "app")
    clean_env.setenv("DB_PASSWORD", "pw")
    clean_env.setenv("DB_PORT", "3307")
    config = ConnectionConfig.from_env("mariadb")
    assert config == ConnectionConfig(host="db", dbname="shop", user="app", password="pw", port=3307)


def test_from_env_requires_host(clean_env):
    clean_env.setenv("DB_NAME", "shop")
    clean_env.setenv("DB_USER", "app")
    with pytest.raises(ValueError, match="DB_HOST is required"):
        ConnectionConfig.from_env("postgres")


def test_from_env_rejects_non_integer_port(clean_env):
    clean_env.setenv("DB_PORT", "abc")
    with pytest.raises(ValueError, match="DB_PORT must be an integer"):
        ConnectionConfig.from_env()


def test_from_env_sqlite_uses_db_path(clean_env):
    clean_env.setenv("DB_ENGINE", "sqlite")
    clean_env.setenv("SQLITE_DB_PATH", "/tmp/app.db")
    config = ConnectionConfig.from_env()
    assert config.dbname == "/tmp/app.db"
    assert config.host == ""

    clean_env.delenv("SQLITE_DB_PATH")
    with pytest.raises(ValueError, match="SQLITE_DB_PATH is required"):
        ConnectionConfig.from_env()
