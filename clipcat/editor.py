"""Edit clip contents with an external text editor."""

from __future__ import annotations

import os
import subprocess
import tempfile
import time
from pathlib import Path

from clipcat.types import PROJECT_NAME


class EditorError(Exception):
    """Raised when the external editor cannot be found, run or read back."""


class ExternalEditor:
    """Runs a text editor program on a temporary file holding the data."""

    def __init__(self, editor: object) -> None:
        self.editor = str(editor)

    @classmethod
    def from_env(cls) -> ExternalEditor:
        """Use the editor named by the ``EDITOR`` environment variable."""
        try:
            editor = os.environ["EDITOR"]
        except KeyError as err:
            raise EditorError(
                "Could not get editor from environment variable, "
                "error: environment variable not found"
            ) from err
        return cls(editor)

    @classmethod
    def new_or_from_env(cls, editor: object | None) -> ExternalEditor:
        """Use ``editor`` if given, otherwise fall back to ``EDITOR``."""
        if editor is not None:
            return cls(editor)
        return cls.from_env()

    def _temporary_path(self) -> Path:
        return Path(tempfile.gettempdir()) / f".{PROJECT_NAME}-{time.time_ns()}"

    def execute(self, data: str) -> str:
        """Let the user edit ``data`` and return the edited text."""
        tmp_file = self._temporary_path()

        try:
            with open(tmp_file, "w", encoding="utf-8", newline="") as handle:
                handle.write(data)
        except OSError as err:
            raise EditorError(
                f"Could not create temporary file: {tmp_file}, error: {err}"
            ) from err

        try:
            subprocess.run([self.editor, str(tmp_file)], check=False)
        except OSError as err:
            tmp_file.unlink(missing_ok=True)
            raise EditorError(
                f"Could not call external text editor: {self.editor}, error: {err}"
            ) from err

        try:
            with open(tmp_file, encoding="utf-8", newline="") as handle:
                edited = handle.read()
        except (OSError, UnicodeDecodeError) as err:
            raise EditorError(
                f"Could not read temporary file: {tmp_file}, error: {err}"
            ) from err

        try:
            tmp_file.unlink()
        except OSError as err:
            raise EditorError(
                f"Could not remove temporary file: {tmp_file}, error: {err}"
            ) from err

        return edited