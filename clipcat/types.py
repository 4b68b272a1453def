"""Core clipboard types shared by the manager, the daemon and the clients."""

from __future__ import annotations

import hashlib
import time
from dataclasses import dataclass, field
from enum import IntEnum

PROJECT_NAME = "clipcat"

DAEMON_PROGRAM_NAME = "clipcatd"
DAEMON_CONFIG_NAME = "clipcatd.toml"
DAEMON_HISTORY_FILE_NAME = "clipcatd/db"

CTL_PROGRAM_NAME = "clipcatctl"
CTL_CONFIG_NAME = "clipcatctl.toml"

MENU_PROGRAM_NAME = "clipcat-menu"
MENU_CONFIG_NAME = "clipcat-menu.toml"

NOTIFY_PROGRAM_NAME = "clipcat-notify"

DEFAULT_GRPC_PORT = 45045
DEFAULT_GRPC_HOST = "127.0.0.1"

DEFAULT_WEBUI_PORT = 45046
DEFAULT_WEBUI_HOST = "127.0.0.1"


class ClipboardError(Exception):
    """Raised when the system clipboard cannot be read or written."""


class ClipboardType(IntEnum):
    """Which X selection a clip belongs to."""

    CLIPBOARD = 0
    PRIMARY = 1

    @classmethod
    def from_int(cls, n: int) -> ClipboardType:
        """Map a wire value to a type; unknown values mean PRIMARY."""
        return cls.CLIPBOARD if n == 0 else cls.PRIMARY


class MonitorState(IntEnum):
    """Whether the clipboard monitor is recording changes."""

    ENABLED = 0
    DISABLED = 1

    @classmethod
    def from_int(cls, n: int) -> MonitorState:
        """Map a wire value to a state; anything but 0 means DISABLED."""
        return cls.ENABLED if n == 0 else cls.DISABLED


@dataclass(eq=False)
class ClipboardEvent:
    """A change observed on one of the selections.

    Events are equal when their contents are equal and are ordered by type.
    """

    data: str
    clipboard_type: ClipboardType

    @classmethod
    def new_clipboard(cls, data: object) -> ClipboardEvent:
        return cls(str(data), ClipboardType.CLIPBOARD)

    @classmethod
    def new_primary(cls, data: object) -> ClipboardEvent:
        return cls(str(data), ClipboardType.PRIMARY)

    @classmethod
    def from_data(cls, data: ClipboardData) -> ClipboardEvent:
        return cls(data.data, data.clipboard_type)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ClipboardEvent):
            return NotImplemented
        return self.data == other.data

    def __hash__(self) -> int:
        return hash(self.data)

    def __lt__(self, other: ClipboardEvent) -> bool:
        return self.clipboard_type < other.clipboard_type

    def __le__(self, other: ClipboardEvent) -> bool:
        return self.clipboard_type <= other.clipboard_type

    def __gt__(self, other: ClipboardEvent) -> bool:
        return self.clipboard_type > other.clipboard_type

    def __ge__(self, other: ClipboardEvent) -> bool:
        return self.clipboard_type >= other.clipboard_type


def _count_lines(text: str) -> int:
    if not text:
        return 0
    parts = text.split("\n")
    if text.endswith("\n"):
        parts.pop()
    return len(parts)


@dataclass(eq=False)
class ClipboardData:
    """A stored clip.

    ``timestamp`` is in nanoseconds since the Unix epoch. Clips are equal when
    their contents are equal; they sort newest first, then by type.
    """

    id: int
    data: str
    clipboard_type: ClipboardType
    timestamp: int = field(default_factory=time.time_ns)

    @classmethod
    def new(cls, data: str, clipboard_type: ClipboardType) -> ClipboardData:
        if clipboard_type == ClipboardType.CLIPBOARD:
            return cls.new_clipboard(data)
        return cls.new_primary(data)

    @classmethod
    def new_clipboard(cls, data: str) -> ClipboardData:
        return cls(cls.compute_id(data), data, ClipboardType.CLIPBOARD, time.time_ns())

    @classmethod
    def new_primary(cls, data: str) -> ClipboardData:
        return cls(cls.compute_id(data), data, ClipboardType.PRIMARY, time.time_ns())

    @classmethod
    def from_event(cls, event: ClipboardEvent) -> ClipboardData:
        return cls(cls.compute_id(event.data), event.data, event.clipboard_type, time.time_ns())

    @classmethod
    def default(cls) -> ClipboardData:
        return cls(0, "", ClipboardType.PRIMARY, 0)

    @staticmethod
    def compute_id(data: str) -> int:
        """Return a stable 64-bit identifier derived from the content."""
        digest = hashlib.blake2b(data.encode("utf-8"), digest_size=8).digest()
        return int.from_bytes(digest, "big")

    def printable_data(self, line_length: int | None) -> str:
        """Return the content on one line, truncated to ``line_length`` chars."""
        text = self.data
        if line_length and len(text) > line_length:
            line_count = _count_lines(text)
            line_info = f"...({line_count} lines)" if line_count > 1 else "..."
            keep = max(line_length - len(line_info), 0)
            text = text[:keep] + line_info
        return text.replace("\n", "\\n").replace("\r", "\\r").replace("\t", "\\t")

    def mark_as_clipboard(self) -> None:
        self.clipboard_type = ClipboardType.CLIPBOARD
        self.timestamp = time.time_ns()

    def mark_as_primary(self) -> None:
        self.clipboard_type = ClipboardType.PRIMARY
        self.timestamp = time.time_ns()

    def _sort_key(self) -> tuple[int, int]:
        return (-self.timestamp, int(self.clipboard_type))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ClipboardData):
            return NotImplemented
        return self.data == other.data

    def __hash__(self) -> int:
        return hash(self.data)

    def __lt__(self, other: ClipboardData) -> bool:
        return self._sort_key() < other._sort_key()

    def __le__(self, other: ClipboardData) -> bool:
        return self._sort_key() <= other._sort_key()

    def __gt__(self, other: ClipboardData) -> bool:
        return self._sort_key() > other._sort_key()

    def __ge__(self, other: ClipboardData) -> bool:
        return self._sort_key() >= other._sort_key()