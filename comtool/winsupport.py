"""Windows communication-port details: device names, error bits, timeouts and modem lines."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Optional

from comtool.serialsettings import LineStatus, SerialError

MAXDWORD = 0xFFFFFFFF
_DWORD_MASK = 0xFFFFFFFF
_COM_PATTERN = re.compile(r"^COM(\d+)")
_DEVICE_PREFIX = "\\\\.\\"


class CommError(enum.IntFlag):
    """Error bits reported by a Windows communication port."""

    RXOVER = 0x0001
    OVERRUN = 0x0002
    RXPARITY = 0x0004
    FRAME = 0x0008
    BREAK = 0x0010
    TXFULL = 0x0100
    IOE = 0x0400
    MODE = 0x8000


class ModemStatus(enum.IntFlag):
    """Modem line bits reported by a Windows communication port."""

    CTS_ON = 0x0010
    DSR_ON = 0x0020
    RING_ON = 0x0040
    RLSD_ON = 0x0080


@dataclass(frozen=True)
class CommTimeouts:
    """Read and write timeouts of a Windows communication port, in milliseconds."""

    read_interval_timeout: int = 0
    read_total_timeout_multiplier: int = 0
    read_total_timeout_constant: int = 0
    write_total_timeout_multiplier: int = 0
    write_total_timeout_constant: int = 0


# Checked in this order: the first bit present decides the error code.
_ERROR_ORDER: tuple[tuple[CommError, SerialError], ...] = (
    (CommError.BREAK, SerialError.BREAK_CONDITION),
    (CommError.FRAME, SerialError.FRAMING_ERROR),
    (CommError.IOE, SerialError.IO_ERROR),
    (CommError.MODE, SerialError.INVALID_FD),
    (CommError.OVERRUN, SerialError.BUFFER_OVERRUN),
    (CommError.RXPARITY, SerialError.RECEIVE_PARITY_ERROR),
    (CommError.RXOVER, SerialError.RECEIVE_OVERFLOW),
    (CommError.TXFULL, SerialError.TRANSMIT_OVERFLOW),
)

_LINE_ORDER: tuple[tuple[ModemStatus, LineStatus], ...] = (
    (ModemStatus.CTS_ON, LineStatus.CTS),
    (ModemStatus.DSR_ON, LineStatus.DSR),
    (ModemStatus.RING_ON, LineStatus.RI),
    (ModemStatus.RLSD_ON, LineStatus.DCD),
)


def full_port_name_win(name: str) -> str:
    """Prefix COM port names with the device namespace so that ports above 9 open."""
    if _COM_PATTERN.search(name):
        return _DEVICE_PREFIX + name
    return name


def translate_comm_error(error: int) -> Optional[SerialError]:
    """Map communication error bits to a port error code, or None if none is set."""
    bits = int(error)
    for flag, code in _ERROR_ORDER:
        if bits & flag:
            return code
    return None


def comm_timeouts(millisec: int, event_driven: bool) -> CommTimeouts:
    """Work out port timeouts; -1 means reads return at once, event-driven ports never wait."""
    if event_driven:
        return CommTimeouts(read_interval_timeout=MAXDWORD)
    millisec = int(millisec)
    as_dword = millisec & _DWORD_MASK
    if millisec == -1:
        interval, constant = MAXDWORD, 0
    else:
        interval, constant = as_dword, as_dword
    return CommTimeouts(
        read_interval_timeout=interval,
        read_total_timeout_multiplier=0,
        read_total_timeout_constant=constant,
        write_total_timeout_multiplier=as_dword,
        write_total_timeout_constant=0,
    )


def modem_status_to_line_status(status: int) -> LineStatus:
    """Convert modem status bits into the port's line status flags."""
    bits = int(status)
    result = LineStatus(0)
    for flag, line in _LINE_ORDER:
        if bits & flag:
            result |= line
    return result