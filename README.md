# fbsdkstate

Small building blocks for applications built on top of an SDK client:
keeping track of navigation frames, saving and restoring session state
between runs, and wiring user actions to callbacks. It has no dependencies
beyond the standard library.

## What is inside

- `fbsdkstate.suspension.SuspensionManager(directory)` keeps a global
  session state (`session_state()`), lets you register `Frame` objects under
  a session key with `register_frame(frame, key, base_key=None)` and remove
  them with `unregister_frame(frame)`. `session_state_for_frame(frame)`
  returns the state mapping for a frame: part of the global state for a
  registered frame, a transient mapping otherwise. `save()` records each
  registered frame's navigation history and writes the whole state to the
  file given by the `path` property (`_sessionState.dat` in the directory);
  `restore(base_key=None)` reads it back and restores the history of frames
  registered with that base key. Misuse, such as registering a frame twice,
  raises `SuspensionError`. `restore()` empties the session state before
  reading, so a missing file (which raises `FileNotFoundError`) or an
  unreadable one leaves it empty.
- `fbsdkstate.frames.Frame` holds a navigation history as a string that can
  be captured with `get_navigation_state()` and put back with
  `set_navigation_state()`.
- `fbsdkstate.serialization` writes and reads a compact, typed, big-endian
  binary format for `None`, integers of fixed widths, floats, booleans,
  16-bit characters, UUIDs, UTF-8 strings and string-keyed maps of those
  values. Use `dumps()` and `loads()` for bytes, or `write_object()` and
  `read_object()` for binary streams. `TypedValue` pins a value to a
  specific `PropertyType`; `StreamType` lists the type codes. Values that
  cannot be written and malformed input raise `SerializationError`.
- `fbsdkstate.navigation` provides the `LoadStateEventArgs` and
  `SaveStateEventArgs` payloads passed to handlers when a page's state is
  loaded or saved.
- `fbsdkstate.commands.RelayCommand` forwards `can_execute()` and
  `execute()` to callbacks you supply, and calls every handler added with
  `connect()` when `raise_can_execute_changed()` is called.
- `fbsdkstate.http` defines `HttpMethod` and the abstract `HttpClient`:
  subclasses implement `send(method, path, parameters)`, and `get`, `post`
  and `delete` delegate to it. `parameters_to_query_string()` URL-encodes a
  mapping, skipping `None` values and writing booleans as `true`/`false`.
- `fbsdkstate.constants` holds the server names, login success path and
  SDK version.

## Installing

```
pip install fbsdkstate
```

## Examples

Round-tripping session data through the binary format:

```python
from fbsdkstate.serialization import dumps, loads

data = dumps({"user": "someone", "visits": 3, "settings": {"dark": True}})
assert loads(data)["settings"] == {"dark": True}
```

Saving and restoring a frame's navigation history:

```python
from fbsdkstate.frames import Frame
from fbsdkstate.suspension import SuspensionManager

manager = SuspensionManager("state")
frame = Frame()
manager.register_frame(frame, "AppFrame")
frame.set_navigation_state("home/details")
manager.save()

later = SuspensionManager("state")
restored = Frame()
later.register_frame(restored, "AppFrame")
later.restore()
assert restored.get_navigation_state() == "home/details"
```

A command that only runs while a condition holds:

```python
from fbsdkstate.commands import RelayCommand

pages = ["home", "details"]

def go_back(parameter):
    pages.pop()

back = RelayCommand(lambda parameter: len(pages) > 1, go_back)
if back.can_execute(None):
    back.execute(None)
back.raise_can_execute_changed()
```

## What it does not do

- There is no working HTTP client: `HttpClient` is an interface, and
  sending requests is left to a subclass you write.
- There is no user interface. `Frame` only stores a navigation history
  string; it does not display or navigate pages.
- There is no command-line program.

## Running the tests

```
pip install "fbsdkstate[test]"
pytest
```