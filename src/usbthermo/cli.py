"""
Command-line front end. Flags follow the classic usbtemp tool:

    -f  Fahrenheit           -i / -I  UTC timestamps (basic / with zone name)
    -j  JSON                 -h       help
    -p  set precision        -q       quiet
    -r / -R  ROM in hex      -s       serial port (a trailing argument wins)
"""
import argparse, re, sys
from typing import Sequence
from usbthermo.config import ParsedOptions
from usbthermo.errors import UsbThermoError, UsageError
from usbthermo.logging_config import setup_logging, resolve_logging_from_options
from usbthermo.runtime import execute

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

def leading_int(text: str) -> int:
    """strtol-style: the leading integer of text, or 0 when there is none."""
    m = _LEADING_INT.match(text)
    return int(m.group(1)) if m else 0

class _Parser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(f"{self.prog}: {message}")

def build_parser() -> argparse.ArgumentParser:
    p = _Parser(prog="usbthermo", add_help=False, description="USB DS18B20 thermometer")
    p.add_argument("-f", dest="units", action="store_const", const="F", default="C")
    p.add_argument("-i", dest="time_style", action="store_const", const="iso", default="local")
    p.add_argument("-I", dest="time_style", action="store_const", const="iso_ext")
    p.add_argument("-j", dest="output", action="store_const", const="json", default="plain")
    p.add_argument("-h", dest="help", action="store_true")
    p.add_argument("-p", dest="precision", type=leading_int, metavar="BITS")
    p.add_argument("-q", dest="verbose", action="store_false")
    p.add_argument("-r", dest="hex_case", action="store_const", const="lower")
    p.add_argument("-R", dest="hex_case", action="store_const", const="upper")
    p.add_argument("-s", dest="port", metavar="PORT")
    p.add_argument("-d", "--driver", default="mock")
    p.add_argument("--log-level", default="WARNING")
    p.add_argument("--log-file")
    p.add_argument("port_arg", nargs="*", metavar="PORT")
    return p

def parse_options(argv: Sequence[str] | None = None) -> ParsedOptions:
    ns = vars(build_parser().parse_args(argv))
    positional = ns.pop("port_arg")
    if positional: ns["port"] = positional[0]
    return ParsedOptions.model_validate(ns)

def main(argv: Sequence[str] | None = None) -> int:
    try:
        opts = parse_options(argv)
        setup_logging(*resolve_logging_from_options(opts))
        return execute(opts)
    except UsbThermoError as e:
        print(e, file=sys.stderr)
        return e.exit_code

def run() -> None:
    sys.exit(main())

if __name__ == "__main__":
    run()
