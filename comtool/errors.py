"""Human-readable descriptions of serial port error codes."""

from __future__ import annotations

from comtool.serialsettings import SerialError

_MESSAGES: dict[SerialError, str] = {
    SerialError.NO_ERROR: "No Error has occurred",
    SerialError.INVALID_FD: "Invalid file descriptor (port was not opened correctly)",
    SerialError.NO_MEMORY: "Unable to allocate memory tables (POSIX)",
    SerialError.CAUGHT_NON_BLOCKED_SIGNAL: "Caught a non-blocked signal (POSIX)",
    SerialError.PORT_TIMEOUT: "Operation timed out (POSIX)",
    SerialError.INVALID_DEVICE: "The file opened by the port is not a valid device",
    SerialError.BREAK_CONDITION: "The port detected a break condition",
    SerialError.FRAMING_ERROR: (
        "The port detected a framing error (usually caused by incorrect baud rate settings)"
    ),
    SerialError.IO_ERROR: "There was an I/O error while communicating with the port",
    SerialError.BUFFER_OVERRUN: "Character buffer overrun",
    SerialError.RECEIVE_OVERFLOW: "Receive buffer overflow",
    SerialError.RECEIVE_PARITY_ERROR: "The port detected a parity error in the received data",
    SerialError.TRANSMIT_OVERFLOW: "Transmit buffer overflow",
    SerialError.READ_FAILED: "General read operation failure",
    SerialError.WRITE_FAILED: "General write operation failure",
    SerialError.PERMISSION_DENIED: "Permission denied",
    SerialError.AGAIN: "Device is already locked",
}


def error_string(code, port_name: str = "") -> str:
    """Describe an error code; unknown codes are reported with their number."""
    try:
        error = SerialError(int(code))
    except ValueError:
        return f"Unknown error: {int(code)}"
    if error is SerialError.FILE_NOT_FOUND:
        return f"The {port_name} file doesn't exists"
    return _MESSAGES[error]