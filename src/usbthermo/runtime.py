from __future__ import annotations
import importlib, logging, sys
from contextlib import contextmanager
from importlib.metadata import entry_points
from typing import Callable, Iterator
from usbthermo.actions import Action, resolve_action, effective_verbose, check_usage, check_host_support
from usbthermo.config import ParsedOptions, VERSION
from usbthermo.errors import EXIT_OK, EXIT_FAILURE, ProbeError, UsageError
from usbthermo.host import default_serial_port
from usbthermo.probe import ProbeDriver, ProbeHandle, MockProbe
from usbthermo.sequencer import AcquisitionSequencer

log = logging.getLogger(__name__)

BANNER = f"USB Thermometer CLI {VERSION} Copyright 2024 usbtemp.com et al. Licensed under MIT licence."
HELP_TEXT = "\n".join([
    "\t-f\tDisplay temperature using the Fahrenheit scale",
    "\t-i\tFormat date as UTC ISO 8601, or -I with the host time zone name",
    "\t-j\tFormat date and temperature as JSON",
    "\t-p\tSet probe precision {9,10,11,12}",
    "\t-q\tQuiet mode",
    "\t-r\tGet probe serial number (ROM) in hexadecimal, or -R in uppercase hexadecimal",
    "\t-s\tSet serial port",
    "\t-d\tProbe driver: mock, an installed plugin name, or module:factory",
])
BUILTIN_DRIVERS: dict[str, Callable[[], ProbeDriver]] = {"mock": MockProbe}
DRIVER_GROUP = "usbthermo.drivers"

def _stderr(msg: str) -> None: print(msg, file=sys.stderr)

def load_driver(name: str) -> ProbeDriver:
    """Built-in name, then an installed entry point, then a module:attribute path."""
    if name in BUILTIN_DRIVERS: return BUILTIN_DRIVERS[name]()
    for ep in entry_points(group=DRIVER_GROUP):
        if ep.name == name: return ep.load()()
    if ":" in name:
        mod, _, attr = name.partition(":")
        try:
            factory = getattr(importlib.import_module(mod), attr)
        except (ImportError, AttributeError) as e:
            raise UsageError(f"Cannot load driver {name}: {e}") from e
        return factory()
    raise UsageError(f"Unknown driver: {name}")

@contextmanager
def open_probe(driver: ProbeDriver, port: str) -> Iterator[ProbeHandle]:
    handle = driver.open(port)
    try:
        yield handle
    finally:
        driver.close(handle)

def execute(options: ParsedOptions, driver: ProbeDriver | None = None,
            out: Callable[[str], None] = print, err: Callable[[str], None] = _stderr, **seq_kwargs) -> int:
    """
    Run one invocation: resolve the action, reject bad combinations before any
    device I/O, then open the probe, run the protocol and always close it.
    Usage problems are raised as UsageError; driver failures become status 1.
    """
    action = resolve_action(options)
    verbose = effective_verbose(options, action)
    check_usage(options, action)
    if action.kind is not Action.HELP:
        driver = driver or load_driver(options.driver)
    log.debug("resolved %s verbose=%s", action, verbose)
    if verbose: out(BANNER)
    if action.kind is Action.HELP:
        out(HELP_TEXT); return EXIT_OK
    check_host_support(options)
    port = options.port or default_serial_port()
    if verbose: out(f"Using serial port: {port}")
    try:
        with open_probe(driver, port) as handle:
            seq = AcquisitionSequencer(driver, handle, options, verbose=verbose, out=out, err=err, **seq_kwargs)
            return seq.run(action)
    except ProbeError as e:
        log.debug("open %s failed: %s", port, e)
        err(driver.errmsg() or str(e))
        return EXIT_FAILURE
