"""In-memory clipboard history with a bounded capacity."""

from __future__ import annotations

import dataclasses
import time
from collections.abc import Callable, Iterable, Iterator

from clipcat.types import ClipboardData, ClipboardError, ClipboardType

DEFAULT_CAPACITY = 40

ClipboardSetter = Callable[[str, ClipboardType], None]


def _copy(clip: ClipboardData) -> ClipboardData:
    return dataclasses.replace(clip)


class ClipboardManager:
    """Holds clips keyed by id, evicting the oldest beyond ``capacity``.

    ``clipboard_setter`` is called with the content and the selection type
    whenever a clip is promoted, so the system clipboard can be updated.
    """

    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        clipboard_setter: ClipboardSetter | None = None,
    ) -> None:
        self.capacity = capacity
        self._clipboard_setter = clipboard_setter
        self._clips: dict[int, ClipboardData] = {}
        self._current_clipboard: ClipboardData | None = None
        self._current_primary: ClipboardData | None = None

    @property
    def current_clipboard(self) -> ClipboardData | None:
        return self._current_clipboard

    @property
    def current_primary(self) -> ClipboardData | None:
        return self._current_primary

    def import_clips(self, clips: Iterable[ClipboardData]) -> None:
        """Replace the stored clips with ``clips``."""
        self._clips = {clip.id: _copy(clip) for clip in clips}
        self._remove_oldest()

    def list(self) -> list[ClipboardData]:
        return [_copy(clip) for clip in self._clips.values()]

    def __iter__(self) -> Iterator[ClipboardData]:
        return iter(self._clips.values())

    def __len__(self) -> int:
        return len(self._clips)

    def get(self, id: int) -> ClipboardData | None:
        clip = self._clips.get(id)
        return _copy(clip) if clip is not None else None

    def insert(self, data: ClipboardData) -> int:
        if data.clipboard_type == ClipboardType.CLIPBOARD:
            self._current_clipboard = _copy(data)
        else:
            self._current_primary = _copy(data)
        self._clips[data.id] = data
        self._remove_oldest()
        return data.id

    def insert_clipboard(self, data: str) -> int:
        return self.insert(ClipboardData.new_clipboard(data))

    def insert_primary(self, data: str) -> int:
        return self.insert(ClipboardData.new_primary(data))

    def _remove_oldest(self) -> None:
        while len(self._clips) > self.capacity:
            oldest = min(self._clips.values(), key=lambda clip: clip.timestamp)
            self.remove(oldest.id)

    def remove(self, id: int) -> bool:
        if self._current_clipboard is not None and self._current_clipboard.id == id:
            self._current_clipboard = None
        if self._current_primary is not None and self._current_primary.id == id:
            self._current_primary = None
        return self._clips.pop(id, None) is not None

    def clear(self) -> None:
        self._current_clipboard = None
        self._current_primary = None
        self._clips.clear()

    def replace(self, old_id: int, data: str) -> tuple[bool, int]:
        """Swap the content of a clip, keeping its type and timestamp."""
        old = self._clips.pop(old_id, None)
        if old is not None:
            clipboard_type, timestamp = old.clipboard_type, old.timestamp
        else:
            clipboard_type, timestamp = ClipboardType.PRIMARY, time.time_ns()
        new_id = ClipboardData.compute_id(data)
        self.insert(ClipboardData(new_id, data, clipboard_type, timestamp))
        return True, new_id

    def mark_as_clipboard(self, id: int) -> None:
        self._promote(id, ClipboardType.CLIPBOARD)

    def mark_as_primary(self, id: int) -> None:
        self._promote(id, ClipboardType.PRIMARY)

    def _promote(self, id: int, clipboard_type: ClipboardType) -> None:
        clip = self._clips.get(id)
        if clip is None:
            return
        if clipboard_type == ClipboardType.CLIPBOARD:
            clip.mark_as_clipboard()
        else:
            clip.mark_as_primary()
        if self._clipboard_setter is None:
            return
        try:
            self._clipboard_setter(clip.data, clipboard_type)
        except ClipboardError:
            raise
        except OSError as err:
            raise ClipboardError(f"Could not paste to clipboard, error: {err}") from err