# neovide

The editor-side core of a graphical Neovim front-end as a Python library. It
covers what lies between the messages an embedded `nvim --embed` process sends
and the commands a renderer would draw from.

## What it contains

- `neovide.cmd_line` – `parse_command_line` reads the front-end's options
  (`--geometry`, `--size`, `--log`, `--server`/`--remote-tcp`, `--wsl`,
  `--frame`, `--maximized`, `--multigrid`, `--nofork`, `--noidle`,
  `--notabs`, `--srgb`/`--nosrgb`, `--vsync`/`--novsync`, `--neovim-bin`,
  `--wayland_app_id`, `--x11-wm-class`, `--x11-wm-class-instance`) with their
  environment fallbacks (`NEOVIDE_WSL`, `NEOVIDE_FRAME`, `NEOVIDE_MAXIMIZED`,
  `NEOVIDE_MULTIGRID`, `NEOVIDE_IDLE`, `NEOVIDE_SRGB`, `NEOVIDE_VSYNC`,
  `NEOVIM_BIN`, `NEOVIDE_APP_ID`, `NEOVIDE_WM_CLASS`,
  `NEOVIDE_WM_CLASS_INSTANCE`) into a `CmdLineSettings`. Arguments after `--`
  are kept for Neovim untouched. `handle_command_line_arguments` then builds
  the final Neovim arguments (`-p` unless `--notabs`, then the files, then the
  passthrough) and applies `--nosrgb`/`--novsync`. Bad input raises
  `CommandLineError`. `build_parser` returns the underlying argparse parser.
- `neovide.dimensions.Dimensions` – parses and prints `<width>x<height>`,
  multiplies and floor-divides element-wise.
- `neovide.frame.Frame` – window decoration choices; `Frame.variants(platform)`
  gives those available on a platform (`transparent` and `buttonless` only on
  macOS).
- `neovide.event_aggregator` – `EventAggregator` routes events to one receiver
  (a `queue.Queue`) per event key; events sent before `register_event` are
  buffered. A shared instance is `EVENT_AGGREGATOR`.
- `neovide.bridge.events` – the redraw event classes (`Resize`, `GridLine`,
  `CursorGoto`, `WindowFloatPosition`, `MessageShow`, ...), `ParseError`,
  `unpack_color` and the argument helpers `extract_values` and
  `extract_values_with_optional`.
- `neovide.bridge.redraw` – `parse_redraw_event` decodes one
  `[name, args...]` batch of a `redraw` notification (as plain Python lists,
  dicts, strings and numbers) into event objects; unknown names are skipped
  and malformed events raise `ParseError`. `parse_style`,
  `parse_grid_line_cell` and `parse_styled_content` decode the parts.
- `neovide.bridge.clipboard` – `format_paste` turns clipboard text into
  Neovim's `[lines, "v" | "V"]` form (handling the `dos` file format);
  `format_copy` joins copied lines into text.
- `neovide.bridge.command` – `build_nvim_command` returns the argv that starts
  Neovim embedded, honouring `neovim_bin`, WSL on Windows and the login shell
  on macOS; raises `NvimNotFoundError` when no `nvim` is found.
  `platform_which` and `platform_exists` may run `which`/`exists` through a
  shell to find it.
- `neovide.editor` – `CharacterGrid`, `Style`/`Colors`/`Color4f`, `Cursor`,
  `Window`, the draw command classes and `DrawCommandBatcher`, and `Editor`,
  which applies redraw events and sends batched draw commands.
  `start_editor` runs an `Editor` on a background thread.

## Examples

```python
from neovide.dimensions import Dimensions

size = Dimensions.parse("100x50")
print(size)             # 100x50
print(size.as_tuple())  # (100, 50)
```

`Dimensions.parse("0x10")` and `Dimensions.parse("100")` raise `ValueError`.

```python
from neovide.cmd_line import handle_command_line_arguments

settings = handle_command_line_arguments(
    ["neovide", "--notabs", "./foo.txt", "--", "--clean"],
    environ={},
    platform="linux",
)
print(settings.neovim_args)  # ['./foo.txt', '--clean']
```

```python
from neovide.bridge.redraw import parse_redraw_event

print(parse_redraw_event(["grid_resize", [1, 80, 24]]))
# [Resize(grid=1, width=80, height=24)]
```

Feeding events to the editor and collecting the draw commands:

```python
from neovide.bridge.redraw import parse_redraw_event
from neovide.editor.draw_commands import DRAW_COMMAND_BATCH
from neovide.editor.editor import Editor, NeovimRedrawEvent
from neovide.event_aggregator import EventAggregator

aggregator = EventAggregator()
batches = aggregator.register_event(DRAW_COMMAND_BATCH)
editor = Editor(aggregator)

for raw in (["grid_resize", [1, 80, 24]], ["flush", []]):
    for event in parse_redraw_event(raw):
        editor.handle_editor_command(NeovimRedrawEvent(event))

batch = batches.get_nowait()  # list of draw commands sent on flush
```

Commands for the application window (`TitleChanged`, `SetMouseEnabled`,
`ListAvailableFonts`) are sent under the key `WindowCommand` from
`neovide.editor.editor`.

## What it does not do

There is no program to run and no window or renderer. The package does not
open a msgpack-RPC connection to Neovim, start the Neovim process itself, or
read or write the system clipboard: it builds the command line, decodes the
already-decoded notification values and formats clipboard text, leaving the
transport and the drawing to the caller.

## Running the tests

Install the `test` extra and run `pytest` from the project root.