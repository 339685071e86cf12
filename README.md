# tuiapps

A handful of small terminal applications built on a tiny rendering layer
(`tuiapps.render`: rectangles, styled spans and lines, bordered blocks,
paragraphs and a constraint layout) and drawn through `blessed`
(`tuiapps.terminal`).

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Applications

Each interactive application switches to the alternate screen, reads keys
without line buffering, hides the cursor, and restores the terminal when it
leaves.

### Hello

```
tuiapps-hello
tuiapps-hello --quickstart
```

Without options: shows "hello world" and exits on any key press.
With `--quickstart`: draws "Hello world!" centred in a bordered box (inset
two cells from the screen edge) on the normal screen, waits five seconds
and exits.

### Basic counter

```
tuiapps-counter-basic
```

A counter in a thick bordered block. `Left` decrements, `Right`
increments, `q` quits. The counter is kept between 0 and 255: stepping
outside that range raises `OverflowError`.

### Checked counter

```
tuiapps-counter-checked
```

The same counter, but `App.increment_counter` raises
`CounterOverflowError("counter overflow")` once the value goes above 2.
The command restores the terminal, prints the error and its chain of
causes to standard error, and exits with status 1. Decrementing below zero
raises `OverflowError`.

### JSON pair editor

```
tuiapps-json-editor
```

Build a set of key/value pairs and print them as a compact JSON object on
standard output when leaving. The screen is drawn on standard error, so the
output can be redirected or piped.

- Main screen: `e` starts a new pair, `q` asks whether to quit.
- Editing: typing fills the active box, `Tab` switches between key and
  value, `Enter` moves from key to value and then saves the pair,
  `Backspace` deletes a character, `Esc` cancels.
- Exit prompt: `y` prints the JSON and quits, `n` or `q` quits without
  printing.

### Event-driven counter

```
tuiapps-counter
```

Events are read on a background thread (`tuiapps.events.EventHandler`)
which also sends a tick every 250 ms. `j` or `Right` increments, `k` or
`Left` decrements, saturating at 0 and 255; `q`, `Esc` or `Ctrl-C` quits.

### Async counter

```
tuiapps-counter-async
```

An `asyncio` version (`tuiapps.counter_async.AsyncTui`) with one tick per
second and thirty render events per second. `j`/`k` change the counter at
once; `J`/`K` change it after a simulated five-second request; `q` quits.
This counter has no bounds.

### Stopwatch

```
tuiapps-stopwatch
```

`Space` starts the stopwatch or records a split, `Enter` or `s` stops it,
`q` quits. Splits are listed newest first as `#NN -- split -- total`, with
times formatted as `MM:SS.mmm` by `tuiapps.stopwatch.format_duration`. A
frames-per-second readout sits in the top right corner.

## Using the pieces without a terminal

The state objects can be driven and rendered in memory:

```python
from tuiapps.counter_basic import App
from tuiapps.render import Buffer, Rect
from tuiapps.terminal import KeyCode, KeyEvent

app = App()
app.handle_key_event(KeyEvent(KeyCode.RIGHT))
buf = Buffer(Rect(0, 0, 50, 4))
app.render(buf.area, buf)
print("\n".join(buf.lines()))
```

```python
from tuiapps.json_app import JsonApp

app = JsonApp()
app.key_input = "name"
app.value_input = "value"
app.save_key_value()
print(app.to_json())  # {"name":"value"}
```

## Limitations

- Only key presses and terminal resizes are read; there is no mouse
  capture, bracketed paste or focus reporting.
- The stopwatch shows its timer as ordinary text, not in large digits.
- The rendering layer treats every character as one cell wide; wide
  characters are not measured specially.