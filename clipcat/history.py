"""Persistent clipboard history stored in an SQLite database."""

from __future__ import annotations

import logging
import os
import sqlite3
from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

from clipcat.types import ClipboardData, ClipboardType

logger = logging.getLogger(__name__)

_SCHEMA = "CREATE TABLE IF NOT EXISTS clips (id BLOB PRIMARY KEY, data TEXT, timestamp INTEGER)"


class HistoryError(Exception):
    """Raised when the history database cannot be used."""


class HistoryDriver(ABC):
    """Storage backend for clipboard history."""

    @abstractmethod
    def load(self) -> list[ClipboardData]: ...

    @abstractmethod
    def save(self, data: Sequence[ClipboardData]) -> None: ...

    @abstractmethod
    def clear(self) -> None: ...

    @abstractmethod
    def put(self, data: ClipboardData) -> None: ...

    @abstractmethod
    def get(self, id: int) -> ClipboardData | None: ...

    @abstractmethod
    def shrink_to(self, min_capacity: int) -> None: ...

    def save_and_shrink_to(self, data: Sequence[ClipboardData], min_capacity: int) -> None:
        self.save(data)
        self.shrink_to(min_capacity)


def _encode_id(id: int) -> bytes:
    return id.to_bytes(8, "little")


def _decode_id(key: bytes) -> int:
    return int.from_bytes(key, "little")


def _decode(id: int, data: object, timestamp: object) -> ClipboardData | None:
    if not isinstance(data, str) or isinstance(timestamp, bool) or not isinstance(timestamp, int):
        logger.warning("Failed to deserialize stored clip")
        return None
    return ClipboardData(id, data, ClipboardType.PRIMARY, timestamp)


@contextmanager
def _db_errors() -> Iterator[None]:
    try:
        yield
    except sqlite3.Error as err:
        raise HistoryError(f"Database error: {err}") from err


class SqliteDriver(HistoryDriver):
    """History kept in a single SQLite file; every clip loads back as PRIMARY."""

    def __init__(self, file_path: str | os.PathLike[str]) -> None:
        path = Path(file_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as err:
            raise HistoryError(f"Could not create directory {path.parent}: {err}") from err
        with _db_errors():
            self._conn = sqlite3.connect(path)
            with self._conn:
                self._conn.execute(_SCHEMA)

    def _entries(self) -> Iterator[tuple[bytes, ClipboardData]]:
        rows = self._conn.execute("SELECT id, data, timestamp FROM clips ORDER BY id").fetchall()
        for key, data, timestamp in rows:
            clip = _decode(_decode_id(key), data, timestamp)
            if clip is not None:
                yield key, clip

    def load(self) -> list[ClipboardData]:
        with _db_errors():
            return [clip for _, clip in self._entries()]

    def save(self, data: Sequence[ClipboardData]) -> None:
        """Store ``data`` and drop every stored clip that is not in it."""
        entries = {_encode_id(clip.id): (clip.data, clip.timestamp) for clip in data}
        with _db_errors():
            ids_in_db = {bytes(row[0]) for row in self._conn.execute("SELECT id FROM clips")}
            with self._conn:
                self._conn.executemany(
                    "DELETE FROM clips WHERE id = ?",
                    [(key,) for key in ids_in_db - entries.keys()],
                )
                self._conn.executemany(
                    "INSERT OR REPLACE INTO clips (id, data, timestamp) VALUES (?, ?, ?)",
                    [(key, text, ts) for key, (text, ts) in entries.items()],
                )

    def shrink_to(self, min_capacity: int) -> None:
        """Delete the oldest clips so that ``min_capacity`` remain."""
        with _db_errors():
            (count,) = self._conn.execute("SELECT COUNT(*) FROM clips").fetchone()
            if count < min_capacity:
                return
            by_timestamp = {clip.timestamp: key for key, clip in self._entries()}
            excess = max(len(by_timestamp) - min_capacity, 0)
            oldest = sorted(by_timestamp)[:excess]
            with self._conn:
                self._conn.executemany(
                    "DELETE FROM clips WHERE id = ?", [(by_timestamp[ts],) for ts in oldest]
                )

    def clear(self) -> None:
        with _db_errors(), self._conn:
            self._conn.execute("DELETE FROM clips")

    def put(self, data: ClipboardData) -> None:
        with _db_errors(), self._conn:
            self._conn.execute(
                "INSERT OR REPLACE INTO clips (id, data, timestamp) VALUES (?, ?, ?)",
                (_encode_id(data.id), data.data, data.timestamp),
            )

    def get(self, id: int) -> ClipboardData | None:
        with _db_errors():
            row = self._conn.execute(
                "SELECT data, timestamp FROM clips WHERE id = ?", (_encode_id(id),)
            ).fetchone()
        if row is None:
            return None
        return _decode(id, *row)

    def close(self) -> None:
        with _db_errors():
            self._conn.close()

    def __enter__(self) -> SqliteDriver:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class HistoryManager:
    """Clipboard history backed by a file on disk."""

    def __init__(self, file_path: str | os.PathLike[str]) -> None:
        self._driver = SqliteDriver(file_path)
        self._file_path = Path(file_path)

    @property
    def path(self) -> Path:
        return self._file_path

    def put(self, data: ClipboardData) -> None:
        self._driver.put(data)

    def clear(self) -> None:
        self._driver.clear()

    def load(self) -> list[ClipboardData]:
        return self._driver.load()

    def save(self, data: Sequence[ClipboardData]) -> None:
        self._driver.save(data)

    def shrink_to(self, min_capacity: int) -> None:
        self._driver.shrink_to(min_capacity)

    def save_and_shrink_to(self, data: Sequence[ClipboardData], min_capacity: int) -> None:
        self.save(data)
        self.shrink_to(min_capacity)

    def close(self) -> None:
        self._driver.close()

    def __enter__(self) -> HistoryManager:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()