"""
Host platform helpers: default serial port, the one-second wait used between
triggering a conversion and reading it back, and strftime capability checks.
"""
import sys, time

DEFAULT_PORTS = {"win32": "COM1", "cygwin": "/dev/ttyS0", "darwin": "/dev/cu.usbserial"}
LINUX_PORT = "/dev/ttyUSB0"

def default_serial_port(platform: str | None = None) -> str:
    plat = platform or sys.platform
    return DEFAULT_PORTS.get(plat, LINUX_PORT)

def wait_1s() -> None:
    time.sleep(1)

def supports_extended_iso() -> bool:
    # %F and %T are C99/XPG4 additions; some C libraries leave them unexpanded or reject them
    try:
        return time.strftime("%F %T", time.gmtime(0)) == "1970-01-01 00:00:00"
    except ValueError:
        return False
