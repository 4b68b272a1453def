"""Configuration files of the menu, the control client and the daemon."""

from __future__ import annotations

import ipaddress
import logging
import os
import tempfile
import tomllib
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TypeVar

import platformdirs
import tomli_w

from clipcat.finder import FinderType
from clipcat.types import (
    CTL_CONFIG_NAME,
    DAEMON_CONFIG_NAME,
    DAEMON_HISTORY_FILE_NAME,
    DAEMON_PROGRAM_NAME,
    DEFAULT_GRPC_HOST,
    DEFAULT_GRPC_PORT,
    MENU_CONFIG_NAME,
    PROJECT_NAME,
)

logger = logging.getLogger(__name__)

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_MAX_HISTORY = 50

_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "WARN", "ERROR")
_NUMERIC_LOG_LEVELS = {"1": "ERROR", "2": "WARN", "3": "INFO", "4": "DEBUG", "5": "TRACE"}

T = TypeVar("T")


class ConfigError(Exception):
    """Raised when a configuration file cannot be read or is invalid."""


def parse_log_level(value: object) -> str:
    """Normalise a log level name (or 1-5) to its upper-case name."""
    if isinstance(value, str):
        text = value.upper()
        if text in _LOG_LEVELS:
            return text
        if text in _NUMERIC_LOG_LEVELS:
            return _NUMERIC_LOG_LEVELS[text]
    raise ConfigError(f"invalid log level: {value!r}")


def _field(table: dict[str, Any], key: str) -> Any:
    try:
        return table[key]
    except KeyError:
        raise ConfigError(f"missing field `{key}`") from None


def _as_table(value: object, name: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ConfigError(f"`{name}` must be a table")
    return value


def _as_host(value: object) -> str:
    if not isinstance(value, str):
        raise ConfigError("host must be a string")
    try:
        return str(ipaddress.ip_address(value))
    except ValueError:
        raise ConfigError(f"invalid IP address: {value}") from None


def _as_port(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 0xFFFF:
        raise ConfigError(f"invalid port: {value!r}")
    return value


def _as_uint(value: object, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigError(f"`{name}` must be a non-negative integer")
    return value


def _as_bool(value: object, name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"`{name}` must be a boolean")
    return value


def _as_str(value: object, name: str) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"`{name}` must be a string")
    return value


def _as_finder(value: object) -> FinderType:
    try:
        return FinderType(value)
    except ValueError:
        raise ConfigError(f"unknown finder: {value!r}") from None


def _load_file(path: str | os.PathLike[str], parse: Callable[[dict[str, Any]], T]) -> T:
    try:
        with open(path, "rb") as handle:
            raw = handle.read()
    except OSError as err:
        raise ConfigError(f"Could not open config from {path}: {err}") from err
    try:
        table = tomllib.loads(raw.decode("utf-8"))
        return parse(table)
    except (tomllib.TOMLDecodeError, UnicodeDecodeError, ConfigError) as err:
        raise ConfigError(f"Could not parse config from {path}: {err}") from err


def _config_dir() -> Path:
    return platformdirs.user_config_path(PROJECT_NAME, PROJECT_NAME)


@dataclass
class RofiConfig:
    line_length: int = 100
    menu_length: int = 30

    @classmethod
    def _from_table(cls, table: dict[str, Any]) -> RofiConfig:
        return cls(
            _as_uint(_field(table, "line_length"), "line_length"),
            _as_uint(_field(table, "menu_length"), "menu_length"),
        )


@dataclass
class DmenuConfig:
    line_length: int = 100
    menu_length: int = 30

    @classmethod
    def _from_table(cls, table: dict[str, Any]) -> DmenuConfig:
        return cls(
            _as_uint(_field(table, "line_length"), "line_length"),
            _as_uint(_field(table, "menu_length"), "menu_length"),
        )


@dataclass
class CustomFinderConfig:
    program: str = "fzf"
    args: list[str] = field(default_factory=list)

    @classmethod
    def _from_table(cls, table: dict[str, Any]) -> CustomFinderConfig:
        args = _field(table, "args")
        if not isinstance(args, list):
            raise ConfigError("`args` must be an array")
        return cls(
            _as_str(_field(table, "program"), "program"),
            [_as_str(arg, "args") for arg in args],
        )


@dataclass
class MenuConfig:
    """Settings of the clip selection menu."""

    server_host: str = DEFAULT_GRPC_HOST
    server_port: int = DEFAULT_GRPC_PORT
    finder: FinderType = FinderType.ROFI
    rofi: RofiConfig | None = field(default_factory=RofiConfig)
    dmenu: DmenuConfig | None = field(default_factory=DmenuConfig)
    custom_finder: CustomFinderConfig | None = field(default_factory=CustomFinderConfig)

    @classmethod
    def default_path(cls) -> Path:
        return _config_dir() / MENU_CONFIG_NAME

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MenuConfig:
        def section(key: str, parser: Callable[[dict[str, Any]], T]) -> T | None:
            value = data.get(key)
            return None if value is None else parser(_as_table(value, key))

        return cls(
            server_host=_as_host(_field(data, "server_host")),
            server_port=_as_port(_field(data, "server_port")),
            finder=_as_finder(_field(data, "finder")),
            rofi=section("rofi", RofiConfig._from_table),
            dmenu=section("dmenu", DmenuConfig._from_table),
            custom_finder=section("custom_finder", CustomFinderConfig._from_table),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "server_host": self.server_host,
            "server_port": self.server_port,
            "finder": self.finder.value,
        }
        if self.rofi is not None:
            result["rofi"] = {
                "line_length": self.rofi.line_length,
                "menu_length": self.rofi.menu_length,
            }
        if self.dmenu is not None:
            result["dmenu"] = {
                "line_length": self.dmenu.line_length,
                "menu_length": self.dmenu.menu_length,
            }
        if self.custom_finder is not None:
            result["custom_finder"] = {
                "program": self.custom_finder.program,
                "args": list(self.custom_finder.args),
            }
        return result

    def to_toml(self) -> str:
        return tomli_w.dumps(self.to_dict())

    @classmethod
    def load(cls, path: str | os.PathLike[str]) -> MenuConfig:
        return _load_file(path, cls.from_dict)

    @classmethod
    def load_or_default(cls, path: str | os.PathLike[str]) -> MenuConfig:
        try:
            return cls.load(path)
        except ConfigError as err:
            logger.warning("Failed to read config file (%s), error: %s", path, err)
            return cls()


@dataclass
class CtlConfig:
    """Settings of the command-line control client."""

    server_host: str = DEFAULT_GRPC_HOST
    server_port: int = DEFAULT_GRPC_PORT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def default_path(cls) -> Path:
        return _config_dir() / CTL_CONFIG_NAME

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CtlConfig:
        return cls(
            server_host=_as_host(_field(data, "server_host")),
            server_port=_as_port(_field(data, "server_port")),
            log_level=parse_log_level(data.get("log_level", DEFAULT_LOG_LEVEL)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "server_host": self.server_host,
            "server_port": self.server_port,
            "log_level": self.log_level,
        }

    def to_toml(self) -> str:
        return tomli_w.dumps(self.to_dict())

    @classmethod
    def load(cls, path: str | os.PathLike[str]) -> CtlConfig:
        return _load_file(path, cls.from_dict)

    @classmethod
    def load_or_default(cls, path: str | os.PathLike[str]) -> CtlConfig:
        try:
            return cls.load(path)
        except ConfigError:
            return cls()


@dataclass
class MonitorConfig:
    load_current: bool = True
    enable_clipboard: bool = True
    enable_primary: bool = True

    @classmethod
    def _from_table(cls, table: dict[str, Any]) -> MonitorConfig:
        return cls(
            **{
                name: _as_bool(_field(table, name), name)
                for name in ("load_current", "enable_clipboard", "enable_primary")
            }
        )


@dataclass
class GrpcConfig:
    host: str = DEFAULT_GRPC_HOST
    port: int = DEFAULT_GRPC_PORT

    @classmethod
    def _from_table(cls, table: dict[str, Any]) -> GrpcConfig:
        return cls(_as_host(_field(table, "host")), _as_port(_field(table, "port")))


def _default_pid_file_path() -> Path:
    runtime_dir = os.environ.get("XDG_RUNTIME_DIR")
    base = Path(runtime_dir) if runtime_dir is not None else Path(tempfile.gettempdir())
    return base / f"{DAEMON_PROGRAM_NAME}.pid"


def _default_history_file_path() -> Path:
    return platformdirs.user_cache_path(PROJECT_NAME, PROJECT_NAME) / DAEMON_HISTORY_FILE_NAME


@dataclass
class DaemonConfig:
    """Settings of the clipboard daemon."""

    daemonize: bool = True
    pid_file: Path = field(default_factory=_default_pid_file_path)
    max_history: int = DEFAULT_MAX_HISTORY
    history_file_path: Path = field(default_factory=_default_history_file_path)
    log_level: str = DEFAULT_LOG_LEVEL
    monitor: MonitorConfig = field(default_factory=MonitorConfig)
    grpc: GrpcConfig = field(default_factory=GrpcConfig)

    @classmethod
    def default_path(cls) -> Path:
        return _config_dir() / DAEMON_CONFIG_NAME

    @classmethod
    def default_history_file_path(cls) -> Path:
        return _default_history_file_path()

    @classmethod
    def default_pid_file_path(cls) -> Path:
        return _default_pid_file_path()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DaemonConfig:
        pid_file = data.get("pid_file")
        history = data.get("history_file_path")
        monitor = data.get("monitor")
        return cls(
            daemonize=_as_bool(_field(data, "daemonize"), "daemonize"),
            pid_file=(
                Path(_as_str(pid_file, "pid_file"))
                if pid_file is not None
                else _default_pid_file_path()
            ),
            max_history=_as_uint(data.get("max_history", DEFAULT_MAX_HISTORY), "max_history"),
            history_file_path=(
                Path(_as_str(history, "history_file_path"))
                if history is not None
                else _default_history_file_path()
            ),
            log_level=parse_log_level(data.get("log_level", DEFAULT_LOG_LEVEL)),
            monitor=(
                MonitorConfig._from_table(_as_table(monitor, "monitor"))
                if monitor is not None
                else MonitorConfig()
            ),
            grpc=GrpcConfig._from_table(_as_table(_field(data, "grpc"), "grpc")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the serialisable settings; the PID file is never written out."""
        return {
            "daemonize": self.daemonize,
            "max_history": self.max_history,
            "history_file_path": str(self.history_file_path),
            "log_level": self.log_level,
            "monitor": {
                "load_current": self.monitor.load_current,
                "enable_clipboard": self.monitor.enable_clipboard,
                "enable_primary": self.monitor.enable_primary,
            },
            "grpc": {"host": self.grpc.host, "port": self.grpc.port},
        }

    def to_toml(self) -> str:
        return tomli_w.dumps(self.to_dict())

    @classmethod
    def load(cls, path: str | os.PathLike[str]) -> DaemonConfig:
        config = _load_file(path, cls.from_dict)
        if config.max_history == 0:
            config.max_history = DEFAULT_MAX_HISTORY
        return config