"""End-to-end tests of layered configuration.

An application typically stacks environment variables over a config
file over built-in defaults, then unmarshals sections into settings
objects.
"""

import dataclasses as _dataclasses
import datetime as _datetime
import pathlib as _pathlib

import pytest as _pytest

import tierconf
import tierconf.kinds as kinds
import tierconf.sources as sources

CONFIG_YAML = """
db:
  host: db.internal
  port: 5432
  timeout: 5s
servers:
  - name: alpha
    weight: 3
  - name: beta
"""

DEFAULTS = {
    "db": {"host": "localhost", "port": 5432, "timeout": "1s", "pool": 4},
    "log": {"level": "info"},
}


@_dataclasses.dataclass
class Server:
    Name: str = ""
    Weight: kinds.Uint8 = 1


@_dataclasses.dataclass
class Database:
    Host: str = ""
    Port: kinds.Uint16 = 0
    Timeout: _datetime.timedelta = _datetime.timedelta(0)
    Pool: int = 0


@_dataclasses.dataclass
class AppConfig:
    Db: Database = _dataclasses.field(default_factory=Database)
    Servers: list[Server] = _dataclasses.field(default_factory=list)


@_pytest.fixture
def app_config(tmp_path: _pathlib.Path) -> tierconf.Config:
    """Environment over YAML file over defaults."""
    path = tmp_path / "app.yaml"
    path.write_text(CONFIG_YAML)
    return tierconf.Config(
        sources.Overlay(
            sources.EnvSource("APP_", environ={"APP_DB_PORT": "6432", "APP_LOG_LEVEL": "debug"}),
            sources.BlobSource.from_file(path),
        ),
        default=sources.DictSource(DEFAULTS),
    )


class TestLayering:
    """Higher layers shadow lower ones key by key."""

    def test_precedence(self, app_config: tierconf.Config) -> None:
        """Each key comes from the highest layer that has it."""
        assert app_config.get("db.port").as_int() == 6432
        assert app_config.get("db.host").as_string() == "db.internal"
        assert app_config.get("db.pool").as_int() == 4
        assert app_config.get("log.level").as_string() == "debug"

    def test_unmarshal(self, app_config: tierconf.Config) -> None:
        """Unmarshalling merges all layers."""
        cfg = AppConfig()
        app_config.unmarshal("", cfg)
        assert cfg.Db == Database(
            Host="db.internal",
            Port=6432,
            Timeout=_datetime.timedelta(seconds=5),
            Pool=4,
        )
        assert cfg.Servers == [Server("alpha", 3), Server("beta", 1)]

    def test_sub_config(self, app_config: tierconf.Config) -> None:
        """Sub-configs see every layer."""
        db = app_config.get_config("db")
        assert db.get("timeout").as_duration() == _datetime.timedelta(seconds=5)
        assert db.get("pool").as_int() == 4
