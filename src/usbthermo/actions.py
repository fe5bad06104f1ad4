from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional
from usbthermo.config import ParsedOptions
from usbthermo.errors import UsageError, UnsupportedOptionError
from usbthermo.host import supports_extended_iso

class Action(Enum):
    HELP = 'help'
    ACQUIRE_TEMP = 'acquire_temp'
    READ_ROM = 'read_rom'
    SET_PRECISION = 'set_precision'

@dataclass(frozen=True)
class ResolvedAction:
    kind: Action
    precision: Optional[int] = None

Rule = Callable[[ParsedOptions, ResolvedAction], ResolvedAction]

def _precision(o: ParsedOptions, a: ResolvedAction) -> ResolvedAction:
    return ResolvedAction(Action.SET_PRECISION, o.precision) if o.precision is not None else a
def _hex_case(o: ParsedOptions, a: ResolvedAction) -> ResolvedAction:
    return ResolvedAction(Action.READ_ROM) if o.hex_case else a
def _fahrenheit(o: ParsedOptions, a: ResolvedAction) -> ResolvedAction:
    return ResolvedAction(Action.ACQUIRE_TEMP) if o.units == 'F' else a
def _help(o: ParsedOptions, a: ResolvedAction) -> ResolvedAction:
    return ResolvedAction(Action.HELP) if o.help else a

# later rules override earlier ones
RULES: tuple[Rule, ...] = (_precision, _hex_case, _fahrenheit, _help)

def resolve_action(options: ParsedOptions) -> ResolvedAction:
    action = ResolvedAction(Action.ACQUIRE_TEMP)
    for rule in RULES:
        action = rule(options, action)
    return action

def effective_verbose(options: ParsedOptions, action: ResolvedAction) -> bool:
    if action.kind is Action.HELP: return True
    if options.output == 'json': return False
    return options.verbose

def check_usage(options: ParsedOptions, action: ResolvedAction) -> None:
    """Reject combinations that must fail before any device is touched."""
    if options.output == 'json' and action.kind is not Action.ACQUIRE_TEMP:
        raise UsageError("JSON output only supported when displaying temperature.")

def check_host_support(options: ParsedOptions) -> None:
    if options.time_style == 'iso_ext' and not supports_extended_iso():
        raise UnsupportedOptionError("Option -I not supported!")
