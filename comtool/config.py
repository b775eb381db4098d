"""Persistent settings of the serial tool, stored as an INI file."""

from __future__ import annotations

import configparser
from dataclasses import dataclass, fields
from datetime import datetime
from pathlib import Path

COM_GROUP = "ComConfig"
NET_GROUP = "NetConfig"

# INI key, attribute name and group of every stored setting, in file order.
_KEYS: tuple[tuple[str, str, str], ...] = (
    ("PortName", "port_name", COM_GROUP),
    ("BaudRate", "baud_rate", COM_GROUP),
    ("DataBit", "data_bit", COM_GROUP),
    ("Parity", "parity", COM_GROUP),
    ("StopBit", "stop_bit", COM_GROUP),
    ("HexSend", "hex_send", COM_GROUP),
    ("HexReceive", "hex_receive", COM_GROUP),
    ("Debug", "debug", COM_GROUP),
    ("AutoClear", "auto_clear", COM_GROUP),
    ("AutoSend", "auto_send", COM_GROUP),
    ("SendInterval", "send_interval", COM_GROUP),
    ("AutoSave", "auto_save", COM_GROUP),
    ("SaveInterval", "save_interval", COM_GROUP),
    ("SendFileName", "send_file_name", COM_GROUP),
    ("DeviceFileName", "device_file_name", COM_GROUP),
    ("Mode", "mode", NET_GROUP),
    ("ServerIP", "server_ip", NET_GROUP),
    ("ServerPort", "server_port", NET_GROUP),
    ("ListenPort", "listen_port", NET_GROUP),
    ("SleepTime", "sleep_time", NET_GROUP),
    ("AutoConnect", "auto_connect", NET_GROUP),
)


@dataclass
class AppConfig:
    """All settings of the tool, with their initial values."""

    port_name: str = "COM1"
    baud_rate: int = 9600
    data_bit: int = 8
    parity: str = "无"
    stop_bit: float = 1.0

    hex_send: bool = False
    hex_receive: bool = False
    debug: bool = False
    auto_clear: bool = False

    auto_send: bool = False
    send_interval: int = 1000
    auto_save: bool = False
    save_interval: int = 5000

    send_file_name: str = "send.txt"
    device_file_name: str = "device.txt"

    mode: str = "Tcp_Client"
    server_ip: str = "127.0.0.1"
    server_port: int = 6000
    listen_port: int = 6000
    sleep_time: int = 100
    auto_connect: bool = True

    def save(self, path) -> None:
        """Write every setting to the INI file at ``path``."""
        path = Path(path)
        lines: list[str] = []
        for group in (COM_GROUP, NET_GROUP):
            if lines:
                lines.append("")
            lines.append(f"[{group}]")
            for key, attr, key_group in _KEYS:
                if key_group == group:
                    lines.append(f"{key}={_format(getattr(self, attr))}")
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def _format(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def _to_int(text: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        return 0


def _to_bool(text: str) -> bool:
    return text.strip().lower() not in ("", "0", "false")


def _unquote(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] == '"':
        return text[1:-1]
    return text


def config_path(app_dir, app_name) -> Path:
    """Return the path of the configuration file for an application."""
    return Path(app_dir) / f"{app_name}_Config.ini"


def check_config(path) -> bool:
    """Check that the file exists and has no empty values.

    If it is missing, empty, unreadable or incomplete, a fresh file with the
    initial values is written and False is returned.
    """
    path = Path(path)
    try:
        if path.stat().st_size == 0:
            raise OSError("empty configuration")
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        AppConfig().save(path)
        return False

    for line in text.splitlines():
        parts = line.replace("\r", "").split("=")
        if len(parts) == 2 and parts[1] == "":
            AppConfig().save(path)
            return False
    return True


def load_config(path) -> AppConfig:
    """Read settings from ``path``, falling back to initial values when the file is bad."""
    path = Path(path)
    if not check_config(path):
        return AppConfig()

    parser = configparser.ConfigParser(interpolation=None, strict=False)
    parser.optionxform = str
    parser.read(path, encoding="utf-8")

    defaults = AppConfig()
    values = {}
    for key, attr, group in _KEYS:
        raw = _unquote(parser.get(group, key, fallback=""))
        current = getattr(defaults, attr)
        if isinstance(current, bool):
            values[attr] = _to_bool(raw)
        elif isinstance(current, float):
            # The stop bit is read back as a whole number.
            values[attr] = float(_to_int(raw))
        elif isinstance(current, int):
            values[attr] = _to_int(raw)
        else:
            values[attr] = raw
    known = {f.name for f in fields(AppConfig)}
    return AppConfig(**{k: v for k, v in values.items() if k in known})


def write_error(app_dir, app_name, message) -> Path:
    """Append a timestamped line to the day's error log and return its path."""
    now = datetime.now()
    path = Path(app_dir) / f"{app_name}_Error_{now:%Y-%m-%d}.txt"
    with path.open("a", encoding="utf-8") as stream:
        stream.write(f"{now:%Y-%m-%d %H:%M:%S}  {message}\n")
    return path


def new_dir(app_dir, dir_name) -> Path:
    """Create a directory; names that are not absolute are taken relative to ``app_dir``."""
    name = str(dir_name)
    if not name.startswith("/") and ":/" not in name:
        target = Path(app_dir) / name
    else:
        target = Path(name)
    target.mkdir(parents=True, exist_ok=True)
    return target


def port_name_choices() -> list[str]:
    """Port names offered for selection."""
    return [f"COM{i}" for i in range(1, 51)]


def baud_rate_choices() -> list[int]:
    """Baud rates offered for selection."""
    return [
        50, 75, 100, 134, 150, 200, 300, 600, 1200, 1800, 2400, 4800, 9600,
        14400, 19200, 38400, 56000, 57600, 76800, 115200, 128000, 256000,
    ]


def send_interval_choices() -> list[int]:
    """Automatic send intervals in milliseconds."""
    return [100, 300, 500, *range(1000, 10001, 1000)]


def save_interval_choices() -> list[int]:
    """Automatic save intervals in milliseconds."""
    return list(range(1000, 10001, 1000))


def sleep_time_choices() -> list[int]:
    """Network receive delays in milliseconds."""
    return [0, 10, 50, *range(100, 1000, 100)]