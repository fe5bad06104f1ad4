import logging, sys, time
from dataclasses import dataclass
from typing import Callable, Literal
from usbthermo.actions import Action, ResolvedAction
from usbthermo.config import ParsedOptions, PRECISION_MIN, PRECISION_MAX
from usbthermo.errors import EXIT_OK, EXIT_FAILURE, ProbeError
from usbthermo.formatter import format_timestamp, format_temperature, format_rom, to_fahrenheit
from usbthermo.host import wait_1s
from usbthermo.probe import ProbeDriver, ProbeHandle

Step = Literal["open","measuring","waiting","acquiring","reading_rom","validating","setting_precision","done"]

def _stderr(msg: str) -> None: print(msg, file=sys.stderr)

@dataclass
class State:
    step: Step = "open"
    reading_c: float | None = None
    read_at: float | None = None

class AcquisitionSequencer:
    """
    Runs the protocol for one resolved action against an already open handle.
    Returns the process status; a driver failure ends the run (no retries).
    """
    def __init__(self, driver: ProbeDriver, handle: ProbeHandle, options: ParsedOptions, verbose: bool = True,
                 wait: Callable[[], None] = wait_1s, clock: Callable[[], float] = time.time,
                 out: Callable[[str], None] = print, err: Callable[[str], None] = _stderr):
        self.driver=driver; self.handle=handle; self.opts=options; self.verbose=verbose
        self.wait=wait; self.clock=clock; self.out=out; self.err=err; self.s=State()
        self._log = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def run(self, action: ResolvedAction) -> int:
        try:
            if action.kind is Action.ACQUIRE_TEMP: return self.acquire_temperature()
            if action.kind is Action.READ_ROM: return self.read_rom()
            if action.kind is Action.SET_PRECISION: return self.set_precision(action.precision)
            raise ValueError(f"action {action.kind.name} has no device protocol")
        except ProbeError as e:
            self._log.debug("driver failed during %s: %s", self.s.step, e)
            self.err(self.driver.errmsg() or str(e))
            return EXIT_FAILURE
        finally:
            self.s.step = "done"

    def acquire_temperature(self) -> int:
        self.s.step = "measuring"; self.driver.measure(self.handle)
        if self.verbose: self.out("Waiting for response ...")
        self.s.step = "waiting"; self.wait()
        self.s.step = "acquiring"; t = self.driver.acquire(self.handle)
        self.s.reading_c = t; self.s.read_at = self.clock()
        if self.opts.units == 'F': t = to_fahrenheit(t)
        ts = format_timestamp(self.s.read_at, self.opts.time_style)
        self.out(format_temperature(ts, t, self.opts.units, self.opts.output == 'json'))
        return EXIT_OK

    def read_rom(self) -> int:
        self.s.step = "reading_rom"; rom = self.driver.rom(self.handle)
        self.out(format_rom(rom, self.opts.hex_case))
        return EXIT_OK

    def set_precision(self, bits: int) -> int:
        self.s.step = "validating"
        if bits is None or not PRECISION_MIN <= bits <= PRECISION_MAX:
            if self.verbose: self.err("Probe precision out of range!")
            return EXIT_FAILURE
        self.s.step = "setting_precision"
        rv = self.driver.set_precision(self.handle, bits)
        self._log.info("set precision %d bits -> %d", bits, rv)
        return rv
