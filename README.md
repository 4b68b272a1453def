# clipcat

Building blocks for a clipboard history manager. The package provides a
bounded in-memory store of clips for both the clipboard and the primary
selection, history kept in an SQLite file, editing through an external text
editor, the line format used to talk to menu finders, and TOML configuration
for a menu, a control client and a daemon.

## Installation

```
pip install clipcat
```

To run the test suite, install the `test` extra and run pytest:

```
pip install "clipcat[test]"
pytest
```

## Clips

`clipcat.types.ClipboardData` holds one clip: an `id` that is a 64-bit hash
of the text, the text in `data`, a `ClipboardType` (`CLIPBOARD` or
`PRIMARY`) and a `timestamp` in nanoseconds since the Unix epoch. Two clips
with the same text are equal. Sorting a list of clips puts the newest first.

```python
from clipcat.types import ClipboardData

clip = ClipboardData.new_clipboard("first line\nsecond line")
print(clip.printable_data(20))   # 'first li...(2 lines)'
```

`printable_data(line_length)` cuts the text to `line_length` characters. It
adds `...` to a cut text, or `...(N lines)` when the text has more than one
line. It then escapes newlines, carriage returns and tabs. A `line_length` of
`None` or `0` means no limit.

`ClipboardEvent` describes a change seen on a selection. `MonitorState`
(`ENABLED`, `DISABLED`) describes a monitor's state. `ClipboardType.from_int`
and `MonitorState.from_int` turn integer values into these enums.

## Managing history in memory

`clipcat.manager.ClipboardManager` stores clips by id. When there are more
than `capacity` clips (40 by default), it removes the oldest ones. It also
keeps the last inserted clipboard clip and primary clip in
`current_clipboard` and `current_primary`.

```python
from clipcat.manager import ClipboardManager

mgr = ClipboardManager(capacity=10)
clip_id = mgr.insert_clipboard("hello")
ok, new_id = mgr.replace(clip_id, "hello, world")
print(len(mgr), mgr.get(new_id).data)
```

`replace` keeps the old clip's type and timestamp. `import_clips` replaces
every stored clip with the clips you give it. `mark_as_clipboard` and
`mark_as_primary` change a stored clip's type and timestamp, then call the
optional `clipboard_setter(text, clipboard_type)` you passed to the
constructor. An `OSError` raised by the setter is re-raised as
`ClipboardError`.

## Persistent history

`clipcat.history.HistoryManager` keeps clips in a single SQLite file, and
creates the file's directory if it is missing. Clips load back with the
`PRIMARY` type.

```python
from clipcat.history import HistoryManager

with HistoryManager("/tmp/clipcat-history.db") as history:
    history.save_and_shrink_to(mgr.list(), 50)
    restored = history.load()
```

`save` stores the given clips and deletes any stored clip that is not among
them. `shrink_to(n)` deletes the oldest clips so that `n` remain. `put`,
`clear` and `load` work as their names say. Database failures raise
`HistoryError`. `SqliteDriver` is the storage backend, and it implements the
abstract `HistoryDriver`.

## Editing with an external editor

`clipcat.editor.ExternalEditor` writes text to a temporary file and runs the
editor program on that file. When the program exits, it reads the file back,
deletes it and returns the text.

```python
from clipcat.editor import ExternalEditor

editor = ExternalEditor.new_or_from_env(None)   # uses $EDITOR
edited = editor.execute("some text")
```

`from_env` raises `EditorError` when `EDITOR` is not set. The same error is
raised when the editor cannot be started or the file cannot be written, read
or removed.

## Finder input and output

`clipcat.finder.FinderStream.generate_input(clips)` produces one
`<index>: <text>` line per clip. `parse_output(data)` reads a finder's output,
as bytes or text, and returns the index at the start of each line. Lines that
do not start with an index are skipped.

`FinderType` lists the finder names `builtin`, `rofi`, `dmenu`, `skim`, `fzf`
and `custom`. `FinderType.parse` accepts any letter case and raises
`FinderError` for an unknown name. `SelectionMode` is `SINGLE` or `MULTIPLE`.

## Configuration

`clipcat.config` reads and writes TOML settings:

- `MenuConfig` holds the server host and port, the finder, and the
  `RofiConfig`, `DmenuConfig` and `CustomFinderConfig` sections.
- `CtlConfig` holds the server host and port and the log level.
- `DaemonConfig` holds the daemonize flag, the PID file, `max_history` (50 by
  default; a value of 0 in a file is read as 50), the history file path, the
  log level, and the `MonitorConfig` and `GrpcConfig` sections.

Each class has `from_dict`, `to_dict`, `to_toml`, `load(path)` and
`default_path()`. `default_path()` points into the user configuration
directory. `MenuConfig.load_or_default` and `CtlConfig.load_or_default` return
the defaults when the file cannot be read. Invalid files raise `ConfigError`.

```python
from clipcat.config import DaemonConfig

print(DaemonConfig().to_toml())
```

## What this package does not do

- It does not watch the X11 clipboard or primary selection.
- It does not write to the system clipboard itself. That is left to the
  `clipboard_setter` you supply.
- It includes no daemon, no network server or client, and no command-line
  programs.
- It does not run finder programs. It only formats their input and parses
  their output.