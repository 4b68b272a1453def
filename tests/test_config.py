import tempfile
import tomllib
from pathlib import Path

import pytest

from clipcat.config import (
    ConfigError,
    CtlConfig,
    DaemonConfig,
    GrpcConfig,
    MenuConfig,
    MonitorConfig,
    parse_log_level,
)
from clipcat.finder import FinderType


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_menu_defaults():
    config = MenuConfig()
    assert config.server_host == "127.0.0.1"
    assert config.server_port == 45045
    assert config.finder is FinderType.ROFI
    assert (config.rofi.line_length, config.rofi.menu_length) == (100, 30)
    assert (config.dmenu.line_length, config.dmenu.menu_length) == (100, 30)
    assert config.custom_finder.program == "fzf"
    assert config.custom_finder.args == []


def test_menu_toml_round_trip():
    config = MenuConfig()
    config.finder = FinderType.DMENU
    config.custom_finder.args = ["--multi", "-x"]
    parsed = MenuConfig.from_dict(tomllib.loads(config.to_toml()))
    assert parsed == config


def test_menu_optional_sections_missing_are_none():
    config = MenuConfig.from_dict(
        {"server_host": "::1", "server_port": 8000, "finder": "fzf"}
    )
    assert config.rofi is None
    assert config.dmenu is None
    assert config.custom_finder is None
    assert "rofi" not in config.to_dict()


def test_menu_invalid_finder():
    with pytest.raises(ConfigError):
        MenuConfig.from_dict(
            {"server_host": "127.0.0.1", "server_port": 1, "finder": "nano"}
        )


def test_menu_invalid_host():
    with pytest.raises(ConfigError):
        MenuConfig.from_dict(
            {"server_host": "not-an-ip", "server_port": 1, "finder": "rofi"}
        )


def test_menu_port_out_of_range():
    with pytest.raises(ConfigError):
        MenuConfig.from_dict(
            {"server_host": "127.0.0.1", "server_port": 70000, "finder": "rofi"}
        )


def test_menu_load_file(tmp_path):
    original = MenuConfig(server_port=9999, finder=FinderType.SKIM)
    path = _write(tmp_path / "menu.toml", original.to_toml())
    assert MenuConfig.load(path) == original


def test_menu_load_or_default_missing(tmp_path):
    assert MenuConfig.load_or_default(tmp_path / "missing.toml") == MenuConfig()


def test_menu_load_or_default_broken(tmp_path):
    path = _write(tmp_path / "broken.toml", "server_port = [")
    assert MenuConfig.load_or_default(path) == MenuConfig()


def test_menu_default_path_name():
    assert MenuConfig.default_path().name == "clipcat-menu.toml"


def test_ctl_log_level_defaults_to_info():
    config = CtlConfig.from_dict({"server_host": "127.0.0.1", "server_port": 45045})
    assert config.log_level == "INFO"


@pytest.mark.parametrize(
    "raw, expected",
    [("debug", "DEBUG"), ("Warn", "WARN"), ("TRACE", "TRACE"), ("1", "ERROR"), ("5", "TRACE")],
)
def test_parse_log_level(raw, expected):
    assert parse_log_level(raw) == expected


def test_parse_log_level_invalid():
    with pytest.raises(ConfigError):
        parse_log_level("loud")


def test_ctl_round_trip_and_load(tmp_path):
    original = CtlConfig(server_host="10.0.0.2", server_port=1234, log_level="DEBUG")
    path = _write(tmp_path / "ctl.toml", original.to_toml())
    assert CtlConfig.load(path) == original


def test_ctl_load_or_default_invalid(tmp_path):
    path = _write(tmp_path / "ctl.toml", 'server_host = "127.0.0.1"\n')
    assert CtlConfig.load_or_default(path) == CtlConfig()
    with pytest.raises(ConfigError):
        CtlConfig.load(path)


def test_ctl_default_path_name():
    assert CtlConfig.default_path().name == "clipcatctl.toml"


def test_daemon_defaults():
    config = DaemonConfig()
    assert config.daemonize is True
    assert config.max_history == 50
    assert config.log_level == "INFO"
    assert config.monitor == MonitorConfig(True, True, True)
    assert config.grpc == GrpcConfig("127.0.0.1", 45045)


def test_daemon_to_dict_skips_pid_file():
    data = DaemonConfig().to_dict()
    assert "pid_file" not in data
    assert data["grpc"] == {"host": "127.0.0.1", "port": 45045}


def test_daemon_round_trip():
    config = DaemonConfig(max_history=12, log_level="WARN")
    config.monitor.enable_primary = False
    parsed = DaemonConfig.from_dict(tomllib.loads(config.to_toml()))
    assert parsed == config


def test_daemon_load_zero_history_uses_default(tmp_path):
    path = _write(
        tmp_path / "d.toml",
        'daemonize = false\nmax_history = 0\n[grpc]\nhost = "127.0.0.1"\nport = 45045\n',
    )
    config = DaemonConfig.load(path)
    assert config.max_history == 50
    assert config.daemonize is False
    assert config.monitor == MonitorConfig()


def test_daemon_requires_grpc(tmp_path):
    path = _write(tmp_path / "d.toml", "daemonize = true\n")
    with pytest.raises(ConfigError, match="parse"):
        DaemonConfig.load(path)


def test_daemon_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="Could not open config"):
        DaemonConfig.load(tmp_path / "nope.toml")


def test_daemon_pid_file_uses_runtime_dir(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_RUNTIME_DIR", str(tmp_path))
    assert DaemonConfig.default_pid_file_path() == tmp_path / "clipcatd.pid"


def test_daemon_pid_file_falls_back_to_temp(monkeypatch):
    monkeypatch.delenv("XDG_RUNTIME_DIR", raising=False)
    expected = Path(tempfile.gettempdir()) / "clipcatd.pid"
    assert DaemonConfig.default_pid_file_path() == expected


def test_daemon_default_paths():
    assert DaemonConfig.default_path().name == "clipcatd.toml"
    history = DaemonConfig.default_history_file_path()
    assert history.parts[-2:] == ("clipcatd", "db")