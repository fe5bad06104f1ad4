import pytest
from usbthermo.errors import ProbeError
from usbthermo.probe import ProbeDriver, ProbeHandle, RomId

class RecordingDriver(ProbeDriver):
    """Fake driver that logs every call and can fail at a chosen step."""
    def __init__(self, fail_at=None, reading=21.5, rom=b"\x28\x0a\xff\x3c\x91\x16\x04\x00", precision_rv=0):
        super().__init__()
        self.fail_at=fail_at; self.reading=reading; self._rom=RomId(rom); self.precision_rv=precision_rv
        self.calls=[]
    def _step(self, name):
        self.calls.append(name)
        if self.fail_at == name: self._fail(f"{name} failed")
    def open(self, port):
        self._step("open"); return ProbeHandle(port)
    def close(self, handle):
        self.calls.append("close"); handle.is_open = False
    def measure(self, handle): self._step("measure")
    def acquire(self, handle):
        self._step("acquire"); return self.reading
    def rom(self, handle):
        self._step("rom"); return self._rom
    def set_precision(self, handle, bits):
        self._step("set_precision"); return self.precision_rv

class Capture:
    def __init__(self): self.out=[]; self.err=[]
    def o(self, msg): self.out.append(msg)
    def e(self, msg): self.err.append(msg)

@pytest.fixture
def driver():
    return RecordingDriver()

@pytest.fixture
def capture():
    return Capture()
