EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = -1
EXIT_UNSUPPORTED = -2

class UsbThermoError(Exception):
    exit_code = EXIT_FAILURE

class UsageError(UsbThermoError):
    """Bad flags or flag combinations, detected before any device I/O."""
    exit_code = EXIT_USAGE

class UnsupportedOptionError(UsageError):
    """Option this host cannot honour (e.g. -I without %F/%T in strftime)."""
    exit_code = EXIT_UNSUPPORTED

class ProbeError(UsbThermoError):
    """A driver call failed; the message is the driver's last error text."""
    exit_code = EXIT_FAILURE
