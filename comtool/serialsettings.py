"""Serial line settings: the value types and a book that validates and tracks changes."""

from __future__ import annotations

import enum
import sys
import warnings
from dataclasses import dataclass, replace
from typing import Callable, Optional

POSIX = "posix"
WINDOWS = "windows"
MAC = "mac"
_PLATFORMS = (POSIX, WINDOWS, MAC)


class SerialSettingsWarning(UserWarning):
    """A setting that the port cannot use was requested."""


class PortabilityWarning(SerialSettingsWarning):
    """A setting that works here but not on every operating system was requested."""


class BaudRate(enum.IntEnum):
    """Line speeds in bits per second."""

    BAUD50 = 50
    BAUD75 = 75
    BAUD110 = 110
    BAUD134 = 134
    BAUD150 = 150
    BAUD200 = 200
    BAUD300 = 300
    BAUD600 = 600
    BAUD1200 = 1200
    BAUD1800 = 1800
    BAUD2400 = 2400
    BAUD4800 = 4800
    BAUD9600 = 9600
    BAUD14400 = 14400
    BAUD19200 = 19200
    BAUD38400 = 38400
    BAUD56000 = 56000
    BAUD57600 = 57600
    BAUD76800 = 76800
    BAUD115200 = 115200
    BAUD128000 = 128000
    BAUD230400 = 230400
    BAUD256000 = 256000
    BAUD460800 = 460800
    BAUD500000 = 500000
    BAUD576000 = 576000
    BAUD921600 = 921600
    BAUD1000000 = 1000000
    BAUD1152000 = 1152000
    BAUD1500000 = 1500000
    BAUD2000000 = 2000000
    BAUD2500000 = 2500000
    BAUD3000000 = 3000000
    BAUD3500000 = 3500000
    BAUD4000000 = 4000000


POSIX_ONLY_BAUD_RATES = frozenset({
    BaudRate.BAUD50, BaudRate.BAUD75, BaudRate.BAUD134, BaudRate.BAUD150,
    BaudRate.BAUD200, BaudRate.BAUD1800, BaudRate.BAUD76800,
    BaudRate.BAUD230400, BaudRate.BAUD460800, BaudRate.BAUD500000,
    BaudRate.BAUD576000, BaudRate.BAUD921600, BaudRate.BAUD1000000,
    BaudRate.BAUD1152000, BaudRate.BAUD1500000, BaudRate.BAUD2000000,
    BaudRate.BAUD2500000, BaudRate.BAUD3000000, BaudRate.BAUD3500000,
    BaudRate.BAUD4000000,
})

WINDOWS_ONLY_BAUD_RATES = frozenset({
    BaudRate.BAUD14400, BaudRate.BAUD56000, BaudRate.BAUD128000, BaudRate.BAUD256000,
})


class DataBits(enum.IntEnum):
    """Number of data bits per character."""

    DATA_5 = 5
    DATA_6 = 6
    DATA_7 = 7
    DATA_8 = 8


class Parity(enum.IntEnum):
    """Parity schemes; MARK is only available on Windows."""

    NONE = 0
    ODD = 1
    EVEN = 2
    MARK = 3
    SPACE = 4


class StopBits(enum.IntEnum):
    """Stop bits per character; 1.5 is only available on Windows."""

    STOP_1 = 0
    STOP_1_5 = 1
    STOP_2 = 2


class FlowControl(enum.IntEnum):
    """Flow control methods."""

    OFF = 0
    HARDWARE = 1
    XONXOFF = 2


class QueryMode(enum.Enum):
    """Whether the port is polled or reports incoming data itself."""

    POLLING = 0
    EVENT_DRIVEN = 1


class LineStatus(enum.IntFlag):
    """Modem control lines that may be high."""

    CTS = 0x01
    DSR = 0x02
    DCD = 0x04
    RI = 0x08
    RTS = 0x10
    DTR = 0x20
    ST = 0x40
    SR = 0x80


class SerialError(enum.IntEnum):
    """Error codes recorded by a port."""

    NO_ERROR = 0
    INVALID_FD = 1
    NO_MEMORY = 2
    CAUGHT_NON_BLOCKED_SIGNAL = 3
    PORT_TIMEOUT = 4
    INVALID_DEVICE = 5
    BREAK_CONDITION = 6
    FRAMING_ERROR = 7
    IO_ERROR = 8
    BUFFER_OVERRUN = 9
    RECEIVE_OVERFLOW = 10
    RECEIVE_PARITY_ERROR = 11
    TRANSMIT_OVERFLOW = 12
    READ_FAILED = 13
    WRITE_FAILED = 14
    FILE_NOT_FOUND = 15
    PERMISSION_DENIED = 16
    AGAIN = 17


class DirtyFlag(enum.IntFlag):
    """Settings changed since they were last applied to the device."""

    BAUD_RATE = 0x0001
    PARITY = 0x0002
    STOP_BITS = 0x0004
    DATA_BITS = 0x0008
    FLOW = 0x0010
    TIMEOUT = 0x0100
    ALL = 0x0FFF
    SETTINGS_MASK = 0x00FF


_NOTHING_DIRTY = DirtyFlag(0)


@dataclass
class PortSettings:
    """A complete set of line settings."""

    baud_rate: int = BaudRate.BAUD9600
    data_bits: DataBits = DataBits.DATA_8
    parity: Parity = Parity.NONE
    stop_bits: StopBits = StopBits.STOP_1
    flow_control: FlowControl = FlowControl.OFF
    timeout_millisec: int = 10


def current_platform() -> str:
    """Name the settings rules that apply to the running system."""
    if sys.platform.startswith("win"):
        return WINDOWS
    if sys.platform == "darwin":
        return MAC
    return POSIX


def _warn(message: str, category: type[Warning] = SerialSettingsWarning) -> None:
    warnings.warn(message, category, stacklevel=4)


Updater = Callable[[PortSettings, DirtyFlag], None]


class SettingsBook:
    """Validated port settings plus the record of what still needs applying.

    When ``updater`` is set (the port is open), every change is handed to it
    together with the dirty flags, after which the flags are cleared.
    """

    def __init__(self, settings: Optional[PortSettings] = None, platform: Optional[str] = None,
                 updater: Optional[Updater] = None) -> None:
        self.platform = platform or current_platform()
        if self.platform not in _PLATFORMS:
            raise ValueError(f"unknown platform {self.platform!r}")
        self.settings = PortSettings()
        self.dirty = DirtyFlag.ALL
        self.updater = updater
        if settings is not None:
            self._port_settings(settings)

    def _update(self) -> None:
        if self.updater is not None and self.dirty:
            self.updater(replace(self.settings), self.dirty)
            self.clear_dirty()

    def _baud_rate(self, baud_rate: int) -> None:
        try:
            rate: int = BaudRate(baud_rate)
        except ValueError:
            rate = int(baud_rate)
        if self.platform == WINDOWS:
            if rate in WINDOWS_ONLY_BAUD_RATES:
                _warn(f"Portability warning: POSIX does not support baud rate {int(rate)}",
                      PortabilityWarning)
        else:
            if rate in POSIX_ONLY_BAUD_RATES:
                _warn(f"Portability warning: Windows does not support baud rate {int(rate)}",
                      PortabilityWarning)
            elif self.platform == POSIX and not isinstance(rate, BaudRate) \
                    or rate in WINDOWS_ONLY_BAUD_RATES and self.platform == POSIX:
                _warn(f"Baud rate {int(rate)} is not supported")
                return
        self.settings.baud_rate = rate
        self.dirty |= DirtyFlag.BAUD_RATE

    def _parity(self, parity: Parity) -> None:
        parity = Parity(parity)
        if parity is Parity.SPACE:
            if self.settings.data_bits is DataBits.DATA_8:
                message = "Space parity with 8 data bits is not supported by POSIX systems."
                if self.platform == WINDOWS:
                    _warn("Portability warning: " + message, PortabilityWarning)
                else:
                    _warn(message)
        elif parity is Parity.MARK:
            if self.platform == WINDOWS:
                _warn("Portability warning: mark parity is not supported by POSIX systems",
                      PortabilityWarning)
            else:
                _warn(f"Parity {parity.name} is not supported")
        self.settings.parity = parity
        self.dirty |= DirtyFlag.PARITY

    def _data_bits(self, data_bits: DataBits) -> None:
        data_bits = DataBits(data_bits)
        stop = self.settings.stop_bits
        if data_bits is DataBits.DATA_5:
            if stop is StopBits.STOP_2:
                _warn("5 data bits cannot be used with 2 stop bits.")
                return
        elif self.platform == WINDOWS and stop is StopBits.STOP_1_5:
            _warn(f"{int(data_bits)} data bits cannot be used with 1.5 stop bits.")
            return
        self.settings.data_bits = data_bits
        self.dirty |= DirtyFlag.DATA_BITS

    def _stop_bits(self, stop_bits: StopBits) -> None:
        stop_bits = StopBits(stop_bits)
        data = self.settings.data_bits
        if stop_bits is StopBits.STOP_1_5:
            if self.platform != WINDOWS:
                _warn("1.5 stop bits are not supported")
                return
            _warn("Portability warning: 1.5 stop bit operation is not supported by POSIX.",
                  PortabilityWarning)
            if data is not DataBits.DATA_5:
                _warn("1.5 stop bits can only be used with 5 data bits")
                return
        elif stop_bits is StopBits.STOP_2 and data is DataBits.DATA_5:
            _warn("2 stop bits cannot be used with 5 data bits")
            return
        self.settings.stop_bits = stop_bits
        self.dirty |= DirtyFlag.STOP_BITS

    def _flow_control(self, flow: FlowControl) -> None:
        self.settings.flow_control = FlowControl(flow)
        self.dirty |= DirtyFlag.FLOW

    def _timeout(self, millisec: int) -> None:
        self.settings.timeout_millisec = int(millisec)
        self.dirty |= DirtyFlag.TIMEOUT

    def _port_settings(self, settings: PortSettings) -> None:
        self._baud_rate(settings.baud_rate)
        self._data_bits(settings.data_bits)
        self._stop_bits(settings.stop_bits)
        self._parity(settings.parity)
        self._flow_control(settings.flow_control)
        self._timeout(settings.timeout_millisec)
        self.dirty = DirtyFlag.ALL

    def set_baud_rate(self, baud_rate) -> None:
        """Set the line speed; a speed this system lacks is refused with a warning."""
        self._baud_rate(baud_rate)
        self._update()

    def set_parity(self, parity) -> None:
        """Set the parity scheme, warning about combinations that may not work."""
        self._parity(parity)
        self._update()

    def set_data_bits(self, data_bits) -> None:
        """Set data bits unless they clash with the current stop bits."""
        self._data_bits(data_bits)
        self._update()

    def set_stop_bits(self, stop_bits) -> None:
        """Set stop bits unless they clash with the current data bits."""
        self._stop_bits(stop_bits)
        self._update()

    def set_flow_control(self, flow) -> None:
        """Set the flow control method."""
        self._flow_control(flow)
        self._update()

    def set_timeout(self, millisec) -> None:
        """Set the read and write timeout in milliseconds; -1 means non-blocking."""
        self._timeout(millisec)
        self._update()

    def set_port_settings(self, settings: PortSettings) -> None:
        """Apply a whole set of settings and mark everything for re-applying."""
        self._port_settings(settings)
        self._update()

    def clear_dirty(self) -> None:
        """Forget pending changes, as after they were written to the device."""
        self.dirty = _NOTHING_DIRTY