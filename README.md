# comtool

Building blocks for a serial port assistant: the serial line settings and
their rules, the tool's INI configuration, a receive buffer, error texts,
Windows port details, and the geometry of an image box.

## Installation

```
pip install .
```

## Modules

### `comtool.serialsettings`

Enums for line settings (`BaudRate`, `DataBits`, `Parity`, `StopBits`,
`FlowControl`, `QueryMode`), line and error codes (`LineStatus`,
`SerialError`), the `PortSettings` dataclass and `SettingsBook`.

`SettingsBook` holds settings for one platform (`"posix"`, `"windows"` or
`"mac"`) and records in `dirty` (a `DirtyFlag`) what has changed. It refuses
combinations that do not work and issues a `SerialSettingsWarning` when it does;
settings that work only on some systems draw a `PortabilityWarning`. If an
`updater` callable is given, each change is passed to it with the dirty flags,
and the flags are then cleared.

```python
from comtool.serialsettings import DataBits, SettingsBook, StopBits

book = SettingsBook(platform="posix")
book.set_stop_bits(StopBits.STOP_2)
book.set_data_bits(DataBits.DATA_5)   # warns: 5 data bits with 2 stop bits
book.settings.data_bits               # DataBits.DATA_8, unchanged
book.clear_dirty()
```

### `comtool.config`

`AppConfig` holds every setting with its initial value and writes them with
`save(path)` into the `[ComConfig]` and `[NetConfig]` groups.
`config_path(app_dir, app_name)` gives `<app_dir>/<app_name>_Config.ini`.
`check_config(path)` rewrites the file with initial values and returns `False`
when it is missing, empty, unreadable or has an empty value; `load_config(path)`
reads it, falling back to `AppConfig()` when the check fails.

`write_error(app_dir, app_name, message)` appends a timestamped line to
`<app_name>_Error_<YYYY-MM-DD>.txt`. `new_dir(app_dir, dir_name)` creates a
directory, relative to `app_dir` unless the name is absolute.
`port_name_choices()`, `baud_rate_choices()`, `send_interval_choices()`,
`save_interval_choices()` and `sleep_time_choices()` list the values offered
for selection.

```python
from comtool.config import config_path, load_config

path = config_path("/opt/comtool", "ComTool")
cfg = load_config(path)
cfg.baud_rate = 115200
cfg.save(path)
```

### `comtool.readbuffer`

`ReadBuffer` is a first-in, first-out byte queue with `append`, `read`,
`read_line`, `read_all`, `chop`, `clear` and `can_read_line`.

```python
from comtool.readbuffer import ReadBuffer

buf = ReadBuffer()
buf.append(b"abc\nde")
buf.can_read_line()   # True
buf.read_line(100)    # b"abc\n"
buf.read_all()        # b"de"
```

### `comtool.errors`

`error_string(code, port_name="")` describes a `SerialError` code; unknown codes
come back as `"Unknown error: <code>"`.

```python
from comtool.errors import error_string

error_string(16)                  # "Permission denied"
error_string(15, "/dev/ttyS0")    # "The /dev/ttyS0 file doesn't exists"
```

### `comtool.winsupport`

`full_port_name_win(name)` prefixes `COM` names with `\\.\`.
`translate_comm_error(bits)` maps `CommError` bits to a `SerialError` (or
`None`). `comm_timeouts(millisec, event_driven)` returns a `CommTimeouts`.
`modem_status_to_line_status(bits)` converts modem bits to `LineStatus`.

### `comtool.layout`

`PictureBox` works out where an image is drawn for each `PictureMode`:
`placement(window_width, window_height)` returns `(offset_x, offset_y, scale)`.

```python
from comtool.layout import PictureBox, PictureMode

box = PictureBox()                      # a 160 x 120 image
box.set_mode(PictureMode.FIX_SIZE_CENTRED)
box.placement(200, 200)                 # (20, 40, 1.0)
```

## What this package does not do

It does not open or talk to serial devices, has no command-line program, no
text/hex codecs for the traffic log, no lidar frame decoding and no TCP
forwarding. It describes settings and data; driving a device is left to the
caller.

## Running the tests

```
pip install .[test]
pytest
```