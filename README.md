# wowstudio

Building blocks for a game-world editing toolkit. The package uses only the standard library.

## Modules

### `wowstudio.hashing`

`jenkins_hash(data)` returns the 32-bit Jenkins one-at-a-time hash of a `str` or `bytes` value. Strings are hashed as UTF-8. Hashing stops at the first NUL byte. Bytes of 0x80 and above count as signed characters.

### `wowstudio.mapped_file`

`MappedFile(filename, mode=MappedFileMode.READ, open_mode=MappedFileOpenMode.OPEN_EXISTING, file_size=0)` maps a file into memory.

- Modes: `MappedFileMode` is `READ`, `WRITE` or `BOTH`. `MappedFileOpenMode` is `CREATE_NEW`, `CREATE_ALWAYS`, `OPEN_EXISTING` or `OPEN_ALWAYS`.
- Size: a `file_size` of 0 maps the file at its current size. An empty file cannot be mapped and raises `ValueError`. If opening creates the file and mapping it then fails, the new file is removed.
- Cursor: `read(size, offset)` and `write(data, offset)` share one cursor. An explicit offset moves the cursor to just past the range it accessed.
  - A read outside the mapping raises `ValueError`.
  - A write past the end grows the file in 1 KiB steps, or in 1 MiB steps for writes larger than 1 KiB.
  - Writing to a read-only file raises `PermissionError`.
- Other methods: `data()`, `size()`, `is_open()`, `flush(offset, size)`, `resize(new_size)` and `close()`.
- The object works as a context manager.

### `wowstudio.safe_queue`

`SafeQueue` is a thread-safe container. The item produced most recently is consumed first.

- `produce(item)` adds an item.
- `consume()` takes an item without waiting, and raises `queue.Empty` when there is none.
- `consume_wait()` blocks until an item arrives or `finish()` is called. If it is released with no item, it raises `queue.Empty`.
- `finish()` wakes every waiting consumer and returns once all of them have returned.
- `front()`, `back()`, `len()` and iteration over a snapshot are also available.

### `wowstudio.components`

`BaseComponent(entity)` and its subclasses `Camera`, `Doodad`, `Model` and `WorldModelObject`.

`MapTile(entity)` holds a 16×16 grid of zeroed `ChunkGPUData` records. Each record has `discard`, `hole`, `height`, `colour` and `normal`, with 145 vertices per chunk. `chunk(x, y)` returns one chunk and raises `IndexError` outside the tile.

### `wowstudio.window_mgr`

`WindowManager` keeps a list of `Window` objects.

- `add_window`, `get_window`, `get_window_from_id`, `remove_window` (raises `ValueError` for an unknown window), `clear_windows` and `len()`.
- `update_windows()` runs `update()` and `render()` on every window that is not closing, and records its frame timing.
- `cleanup_windows(force=False)` removes closing windows, or every window when `force` is true, and returns the removed ones.
- `process_events(events)` first initialises windows that have not been initialised. It then sends each `WindowEvent` to the window named by its `window_id`, or to every window when the event has none.

A `Window` closes itself when it receives an event of type `"window_close_requested"`.

### `wowstudio.rect_pack`

`RectPacker(width, height, num_nodes)` packs `PackRect` objects into a target area using a skyline algorithm.

- `pack_rects(rects)` fills in `x`, `y` and `was_packed` on each rectangle, tallest first. It returns whether all of them fit. A rectangle that does not fit gets both coordinates set to `MAX_COORD`.
- `setup_heuristic` chooses bottom-left or best-fit placement (`Heuristic`).
- `setup_allow_out_of_mem` switches between quantised widths and exact widths. Exact widths may run out of nodes.

### `wowstudio.textedit`

A multi-line text-editing engine.

- `layout`:
  - `TextBuffer` is the protocol a buffer has to follow.
  - `MonospaceBuffer(text, char_width, line_height)` is a fixed-width implementation of it.
  - `locate_coord(buffer, x, y)` maps a point to a character index.
  - `find_charpos(buffer, n, single_line)` finds a character's position and the row it is on.
- `undo`: `UndoState` is a bounded undo/redo history. By default it holds 99 records and 999 characters. The oldest entries are dropped when space runs out.
- `editor`: `TextEditState` holds the cursor, the selection, insert mode and the undo history.
  - Methods: `click`, `drag`, `cut`, `paste`, `text` and `key`.
  - `key` accepts a `Key`, optionally or'd with `Key.SHIFT`, a character code, or a string to type.

## Installation

```
pip install .
```

To get the test dependencies, install with the `test` extra:

```
pip install .[test]
```

## Example

```python
from wowstudio.hashing import jenkins_hash
print(hex(jenkins_hash("a")))

from wowstudio.rect_pack import RectPacker, PackRect
packer = RectPacker(64, 64, 64)
rects = [PackRect(id=0, w=32, h=16), PackRect(id=1, w=16, h=16)]
all_packed = packer.pack_rects(rects)

from wowstudio.textedit.layout import MonospaceBuffer
from wowstudio.textedit.editor import TextEditState, Key
buf = MonospaceBuffer("hello", 8.0, 16.0)
state = TextEditState(False)
state.key(buf, Key.TEXTEND)
state.text(buf, " world")
state.key(buf, Key.UNDO)
print(buf.text)  # "hello"
```

## What it does not do

- It is a library only. It has no command-line tool and no application.
- `WindowManager` drives plain `Window` objects. It opens no on-screen windows, draws nothing and reads no events from the operating system; events have to be passed in as `WindowEvent`s.
- Nothing in the package reads game archives, map files or model files. The components only hold data.