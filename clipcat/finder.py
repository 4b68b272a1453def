"""Selection of clips through a text finder such as rofi, dmenu or fzf."""

from __future__ import annotations

import re
from collections.abc import Sequence
from enum import Enum

from clipcat.types import ClipboardData

ENTRY_SEPARATOR = "\n"
INDEX_SEPARATOR = ":"

_INDEX_RE = re.compile(r"\+?[0-9]+")


class FinderError(Exception):
    """Raised when a finder cannot be chosen or run."""


class SelectionMode(Enum):
    """Whether the finder lets the user pick one entry or several."""

    SINGLE = "single"
    MULTIPLE = "multiple"


class FinderType(Enum):
    """The text finders the menu can use."""

    BUILTIN = "builtin"
    ROFI = "rofi"
    DMENU = "dmenu"
    SKIM = "skim"
    FZF = "fzf"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, finder: str) -> FinderType:
        """Parse a finder name, ignoring case."""
        try:
            return cls(finder.lower())
        except ValueError:
            raise FinderError(f"Invalid finder: {finder}") from None

    @classmethod
    def available_types(cls) -> list[FinderType]:
        return list(cls)

    def __str__(self) -> str:
        return self.value


class FinderStream:
    """Formats clips as finder input lines and reads selected indices back."""

    line_length: int | None = None
    menu_length: int | None = None

    def generate_input(self, clips: Sequence[ClipboardData]) -> str:
        """Return one ``<index>: <content>`` line per clip."""
        return ENTRY_SEPARATOR.join(
            f"{index}{INDEX_SEPARATOR} {clip.printable_data(self.line_length)}"
            for index, clip in enumerate(clips)
        )

    def parse_output(self, data: bytes | str) -> list[int]:
        """Return the indices found at the start of each selected line."""
        text = data.decode("utf-8", errors="replace") if isinstance(data, bytes) else data
        indices = []
        for entry in text.split(ENTRY_SEPARATOR):
            head = entry.split(INDEX_SEPARATOR, 1)[0]
            if _INDEX_RE.fullmatch(head):
                indices.append(int(head))
        return indices