from __future__ import annotations
import logging, random
from dataclasses import dataclass, field
from usbthermo.config import ROM_SIZE, PRECISION_MAX
from usbthermo.errors import ProbeError

DS18B20_FAMILY = 0x28

def crc8(data: bytes) -> int:
    """Dallas/Maxim CRC-8 (poly x^8+x^5+x^4+1, reflected 0x8c)."""
    crc = 0
    for byte in data:
        for _ in range(8):
            mix = (crc ^ byte) & 0x01
            crc >>= 1
            if mix: crc ^= 0x8c
            byte >>= 1
    return crc

class RomId(bytes):
    """Factory ROM of a probe: family code, 48-bit serial, CRC. Always ROM_SIZE bytes."""
    def __new__(cls, data):
        b = bytes(data)
        if len(b) != ROM_SIZE: raise ValueError(f"ROM must be {ROM_SIZE} bytes, got {len(b)}")
        return super().__new__(cls, b)
    @property
    def family(self) -> int: return self[0]
    @property
    def crc_ok(self) -> bool: return crc8(self[:-1]) == self[-1]

@dataclass
class ProbeHandle:
    port: str
    is_open: bool = True
    state: dict = field(default_factory=dict)

class ProbeDriver:
    """
    Handle-based probe operations. Failing calls raise ProbeError carrying the
    same text errmsg() reports afterwards.
    """
    def __init__(self): self._errmsg = ""
    def errmsg(self) -> str: return self._errmsg
    def _fail(self, msg: str):
        self._errmsg = msg; raise ProbeError(msg)
    def open(self, port: str) -> ProbeHandle: raise NotImplementedError
    def close(self, handle: ProbeHandle) -> None: raise NotImplementedError
    def measure(self, handle: ProbeHandle) -> None: raise NotImplementedError
    def acquire(self, handle: ProbeHandle) -> float: raise NotImplementedError
    def rom(self, handle: ProbeHandle) -> RomId: raise NotImplementedError
    def set_precision(self, handle: ProbeHandle, bits: int) -> int: raise NotImplementedError

class MockProbe(ProbeDriver):
    """Simulated DS18B20; readings drift around start_c and honour the precision setting."""
    def __init__(self, start_c: float = 22.0, serial: bytes = b"\x0a\xff\x3c\x91\x16\x04"):
        super().__init__()
        self.t = start_c
        body = bytes([DS18B20_FAMILY]) + serial
        self._rom = RomId(body + bytes([crc8(body)]))
        self.precision = PRECISION_MAX
        self._log = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
    def _check(self, handle: ProbeHandle):
        if not handle.is_open: self._fail("Device is not connected")
    def open(self, port: str) -> ProbeHandle:
        if not port: self._fail("Serial port not specified")
        self._log.debug("open %s", port)
        return ProbeHandle(port)
    def close(self, handle: ProbeHandle) -> None:
        self._log.debug("close %s", handle.port); handle.is_open = False
    def measure(self, handle: ProbeHandle) -> None:
        self._check(handle); handle.state["converting"] = True
    def acquire(self, handle: ProbeHandle) -> float:
        self._check(handle)
        if not handle.state.pop("converting", False): self._fail("No conversion in progress")
        self.t += random.uniform(-0.05, 0.05)
        step = 0.5 / (1 << (self.precision - 9))
        return round(self.t / step) * step
    def rom(self, handle: ProbeHandle) -> RomId:
        self._check(handle); return self._rom
    def set_precision(self, handle: ProbeHandle, bits: int) -> int:
        self._check(handle); self.precision = bits; return 0
