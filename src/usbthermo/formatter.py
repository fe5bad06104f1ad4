from __future__ import annotations
import json, time
from typing import Literal, Optional

TimeStyle = Literal['local','iso','iso_ext']
TIME_FORMATS = {"local": "%b %d %H:%M:%S", "iso": "%Y-%m-%dT%H:%M:%SZ", "iso_ext": "%FT%T%Z"}
HEX_FORMATS = {"lower": "{:02x}", "upper": "{:02X}"}

def to_fahrenheit(c: float) -> float:
    return (9 * c) / 5 + 32

def format_timestamp(epoch: float, style: TimeStyle = "local") -> str:
    """Render a wall-clock instant; 'local' uses local time, the ISO styles use UTC."""
    tm = time.localtime(epoch) if style == "local" else time.gmtime(epoch)
    return time.strftime(TIME_FORMATS[style], tm)

def format_temperature(timestamp: str, value: float, units: str = "C", as_json: bool = False) -> str:
    if as_json:
        return '{ "time": %s, "temp_%s": %.2f }' % (json.dumps(timestamp), units.lower(), value)
    return f"{timestamp} Sensor {units}: {value:.2f}"

def format_rom(rom: bytes, hex_case: Optional[str] = "lower") -> str:
    fmt = HEX_FORMATS[hex_case or "lower"]
    return "ROM: " + "".join(fmt.format(b) for b in rom)
